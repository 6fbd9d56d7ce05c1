from enum import Enum


class ExecutionClass(Enum):
    """How a unilateral dumbbell biceps curl was performed."""
    CORRECT = "A"
    ELBOWS_FORWARD = "B"
    LIFT_HALFWAY = "C"
    LOWER_HALFWAY = "D"
    HIPS_FORWARD = "E"


CLASS_DESCRIPTIONS = {
    ExecutionClass.CORRECT: "exactly according to the specification",
    ExecutionClass.ELBOWS_FORWARD: "throwing the elbows to the front",
    ExecutionClass.LIFT_HALFWAY: "lifting the dumbbell only halfway",
    ExecutionClass.LOWER_HALFWAY: "lowering the dumbbell only halfway",
    ExecutionClass.HIPS_FORWARD: "throwing the hips to the front",
}


def describe_label(label: str) -> str:
    try:
        return CLASS_DESCRIPTIONS[ExecutionClass(label)]
    except ValueError:
        return "unknown"
