"""Path variable patterns.

``:name`` and ``{name}`` capture one segment as text; ``{name:int}`` and
``{name:float}`` only match numeric segments.
"""

import re

# regex pattern for each supported variable type
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
}


def compile_converter(param_type: str) -> re.Pattern[str]:
    """Anchored regex for one path segment of *param_type*.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return re.compile(f"^{CONVERTERS[param_type]}$")
