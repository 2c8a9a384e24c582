"""Single-line YAML rendering of option and message mappings.

Validators describe their non-default configuration in YAML flow style,
e.g. ``{max_length: 10, trim: true}``. The same syntax is accepted for
values typed on the command line.
"""
from decimal import Decimal
from typing import Any

import yaml


class InlineDumper(yaml.SafeDumper):
    """Safe dumper that renders any value instead of refusing it.

    Decimals are written as plain numbers, sets as sorted flow sequences,
    and objects YAML has no representer for as their `str()` text.
    """


def _represent_decimal(dumper: InlineDumper, data: Decimal) -> yaml.Node:
    text = str(data)
    return dumper.represent_scalar(dumper.resolve(yaml.ScalarNode, text, (True, False)), text)


def _represent_set(dumper: InlineDumper, data: Any) -> yaml.Node:
    return dumper.represent_list(sorted(data, key=str))


def _represent_object(dumper: InlineDumper, data: Any) -> yaml.Node:
    return dumper.represent_str(str(data))


InlineDumper.add_representer(Decimal, _represent_decimal)
InlineDumper.add_representer(set, _represent_set)
InlineDumper.add_representer(frozenset, _represent_set)
InlineDumper.add_multi_representer(object, _represent_object)


def dump_inline(data: Any) -> str:
    """Renders data as a one-line YAML flow-style string.

    Keys keep their insertion order and long values are never wrapped.
    Values without a YAML form, such as decimals or arbitrary objects, are
    rendered as their text.

    Args:
        data (Any): A mapping, sequence or scalar.

    Returns:
        str: The inline representation, without a trailing newline.
    """
    dumped = yaml.dump(
        data,
        Dumper=InlineDumper,
        default_flow_style=True,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    # Scalars are emitted as a document followed by an explicit end marker.
    if dumped.endswith("\n...\n"):
        dumped = dumped[: -len("\n...\n")]
    return dumped.strip()


def parse_inline(text: str) -> Any:
    """Parses a YAML scalar or flow collection typed by a user.

    `"true"` becomes ``True``, `"5"` becomes ``5`` and `"{a: 1}"` a dict.
    Text that is not valid YAML is returned unchanged.

    Args:
        text (str): The raw value.

    Returns:
        Any: The parsed value.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text
