"""Job layer package for obfuscation workflow orchestration boundaries."""

from .interfaces import TransformationJobPort
from .transformation_orchestrator import NO_CODE_MESSAGE, TransformationJobOrchestrator

__all__ = [
	"NO_CODE_MESSAGE",
	"TransformationJobOrchestrator",
	"TransformationJobPort",
]
