from pathlib import Path


class SkillsKitError(Exception):
    """Base user-facing application error."""


class SkillsFileError(SkillsKitError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class RuleReadError(SkillsFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read rule file ({detail})")


class MissingRulesDirError(SkillsFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing rules directory")


class InvalidMetadataError(SkillsFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid rules metadata ({detail})")

