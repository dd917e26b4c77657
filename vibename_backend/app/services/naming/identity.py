# vibename_backend/app/services/naming/identity.py
from __future__ import annotations

import re

# "_<digits>" groups anchored at the end: "jisoo_지수_01" -> "jisoo_지수".
# ASCII digits only. Stacked groups go together so the result is already
# a base identity.
_VARIANT_SUFFIX = re.compile(r"(?:_[0-9]+)+$")


def base_identity(identifier: str) -> str:
    """
    Strip the numeric variant suffix from a name identifier.

    Both the recommend path and the shared-result path look up companions
    through this function; never query celebrities by the full name_id.
    """
    return _VARIANT_SUFFIX.sub("", identifier)
