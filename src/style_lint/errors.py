from __future__ import annotations

from typing import Any


class StyleLintError(Exception):
    pass


class ConfigurationError(StyleLintError, ValueError):
    pass


class ParseError(StyleLintError):
    def __init__(self, path: str, line: int, column: int, message: str):
        super().__init__(f"{path}:{line}:{column}: {message}")
        self.path = path
        self.line = line
        self.column = column
        self.message = message

    def __reduce__(self):
        return (type(self), (self.path, self.line, self.column, self.message))

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }


class RuleEvaluationError(StyleLintError):
    def __init__(self, rule_id: str, path: str, cause: BaseException):
        super().__init__(f"rule {rule_id} failed on {path}: {type(cause).__name__}: {cause}")
        self.rule_id = rule_id
        self.path = path
        self.cause = cause


class LoadError(StyleLintError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    def __reduce__(self):
        return (type(self), (self.path, self.reason))

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}
