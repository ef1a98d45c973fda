from .analysis import INTAKE_ANALYSIS_PROMPT, INTAKE_ANALYSIS_SYSTEM_INSTRUCTION

__all__ = [
    "INTAKE_ANALYSIS_PROMPT",
    "INTAKE_ANALYSIS_SYSTEM_INSTRUCTION",
]
