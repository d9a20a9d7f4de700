"""Auto-registration engine.

Patches existing aggregator files so that freshly generated artifacts are
wired into the application::

    from simpledi.registry import Registrar, core_module_edit

    result = await Registrar().register(config.core_module_path, core_module_edit(forms, config))
    if not result.outcome.is_registered:
        print_warning(result.message)
"""

from simpledi.registry.aggregators import (
    core_module_edit,
    crud_use_case_module_edit,
    route_edit,
    schema_export_edit,
    use_case_module_edit,
)
from simpledi.registry.patcher import BracketScanningPatcher, TextPatcher
from simpledi.registry.registrar import (
    Registrar,
    RegistrationEdit,
    RegistrationOutcome,
    RegistrationResult,
    register_reference,
)

__all__ = [
    "BracketScanningPatcher",
    "Registrar",
    "RegistrationEdit",
    "RegistrationOutcome",
    "RegistrationResult",
    "TextPatcher",
    "core_module_edit",
    "crud_use_case_module_edit",
    "register_reference",
    "route_edit",
    "schema_export_edit",
    "use_case_module_edit",
]
