"""Rule passes for markscript.

Eight independent passes run over a finished Document in a fixed order and
report to one shared DiagnosticCollector:

1. IdentifierValidator: declared names, function names and parameters
2. ConstantValidator: const names, initializers and declaration order
3. AssignmentValidator: assignment operators and chains
4. FunctionValidator: function names, parameters and bodies
5. DataInputValidator: ``getElementById`` lookups
6. DataOutputValidator: ``innerHTML`` writes
7. DoctypeValidator: doctype presence and placement
8. SkeletonValidator: ``<html>``, ``<head>`` and ``<body>``

Thread Safety:
Passes keep per-run state. Build a fresh list with ``default_validators``
for each run.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.utils.logger import get_logger
from markscript.validators.assignments import AssignmentValidator
from markscript.validators.constants import ConstantValidator
from markscript.validators.data_input import DataInputValidator
from markscript.validators.data_output import DataOutputValidator
from markscript.validators.functions import FunctionValidator
from markscript.validators.identifiers import IdentifierValidator
from markscript.validators.protocol import Validator
from markscript.validators.structure import DoctypeValidator, SkeletonValidator
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from markscript.diagnostics import DiagnosticCollector
    from markscript.nodes import Document

logger = get_logger(__name__)


def default_validators(element_ids: Iterable[str]) -> list[Validator]:
    """The eight passes in their fixed run order."""
    ids = tuple(element_ids)
    return [
        IdentifierValidator(),
        ConstantValidator(),
        AssignmentValidator(),
        FunctionValidator(),
        DataInputValidator(ids),
        DataOutputValidator(ids),
        DoctypeValidator(),
        SkeletonValidator(),
    ]


def run_validators(
    document: Document,
    collector: DiagnosticCollector,
    validators: Sequence[Validator],
) -> None:
    """Run ``validators`` in order against ``document``."""
    for validator in validators:
        before = collector.count
        validator.validate(document, collector)
        logger.debug(
            "Pass %s reported %d diagnostic(s)",
            validator.name,
            collector.count - before,
        )


__all__ = [
    "AssignmentValidator",
    "ConstantValidator",
    "DataInputValidator",
    "DataOutputValidator",
    "DoctypeValidator",
    "FunctionValidator",
    "IdentifierValidator",
    "ScriptWalker",
    "SkeletonValidator",
    "Validator",
    "default_validators",
    "run_validators",
]
