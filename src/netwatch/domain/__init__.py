"""Domain model for NetWatch.

This package holds every game rule in one place and never touches storage:

* Value objects (see :mod:`values`) and aggregates (see :mod:`models`).
* Enumerations and strongly-typed identifiers.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions for address allocation, hack outcomes and unlock
  eligibility.

Application services load aggregates through repositories, call these
functions, and hand the returned values back for saving.
"""

from . import (
    addressing,
    enums,
    errors,
    hacking,
    models,
    progression,
    rules_config,
    values,
)

__all__ = [
    "addressing",
    "enums",
    "errors",
    "hacking",
    "models",
    "progression",
    "rules_config",
    "values",
]
