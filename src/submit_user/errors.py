from typing import List


class SubmitUserError(Exception):
    pass


class MissingField(SubmitUserError):
    def __init__(self, fields: List[str]):
        super().__init__(f"missing fields: {', '.join(fields)}")
        self.fields = fields


class ValidationFailure(SubmitUserError):
    def __init__(self, violations: List[str]):
        super().__init__(" ".join(violations))
        self.violations = violations


class PersistenceFailure(SubmitUserError):
    pass
