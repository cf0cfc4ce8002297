from collections.abc import Mapping
from typing import TypeAlias

# Types allowed in decoded error payloads
JsonTypes: TypeAlias = bool | str | int | float | dict | list | None

# Response headers handed to decoders (name -> all values)
HeaderContext: TypeAlias = Mapping[str, list[str]]
