from enum import IntEnum

class Outcome(IntEnum):
    INCORRECT = 0
    CORRECT = 1

OUTCOME_LABELS = {
    Outcome.INCORRECT: "没记住",
    Outcome.CORRECT: "记住了",
}

def outcome_of(correct: bool) -> Outcome:
    return Outcome.CORRECT if correct else Outcome.INCORRECT
