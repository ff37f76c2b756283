"""
This module contains variables that can be tweaked by the system environment. The tag registry is
NOT configured here; it is code configuration validated once at import time (see
`richtext.documents.registry`).
"""

import os
from dataclasses import dataclass


@dataclass
class ENVConfig:
    """class for configuring environment parameters"""

    def _get_string(self, var: str, default_value: str = "") -> str:
        """attempt to get the value of var from the os environment; if not present return the
        default_value"""
        return os.environ.get(var, default_value)

    def _get_bool(self, var: str, default_value: bool) -> bool:
        if value := self._get_string(var):
            return value.lower() in ("true", "1", "t")
        return default_value

    @property
    def RICHTEXT_ESCAPE_TEXT(self) -> bool:
        """when True, `&`, `<` and `>` in block text are escaped before being embedded in markup

        Off by default so rendered output stays byte-identical to the unescaped form.
        """
        return self._get_bool("RICHTEXT_ESCAPE_TEXT", False)

    @property
    def LOG_LEVEL(self) -> str:
        """name of the level the `richtext` logger is set to by `get_logger()`"""
        return self._get_string("LOG_LEVEL", "WARNING")


env_config = ENVConfig()
