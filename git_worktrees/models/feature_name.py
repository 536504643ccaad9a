"""Feature name model and validation."""

from dataclasses import dataclass

from git_worktrees.constants import NAME_PATTERN, RESERVED_NAMES
from git_worktrees.exceptions import ErrorKind, ValidationError


@dataclass(frozen=True)
class FeatureName:
    """A validated, normalized worktree name such as ``001-login-form``.

    Instances should be built with :meth:`validate`; construction is the only
    point where the naming rules are enforced. Uniqueness is not checked here
    since it depends on which worktrees currently exist.
    """

    value: str

    @staticmethod
    def normalize(raw: str) -> str:
        """Normalize a raw name for comparison (lower-cased)."""
        return raw.lower()

    @classmethod
    def is_valid_format(cls, raw: str) -> bool:
        """Check only the format rule, without the reserved-name rule."""
        if not isinstance(raw, str):
            return False
        return NAME_PATTERN.fullmatch(cls.normalize(raw)) is not None

    @classmethod
    def validate(cls, raw: str) -> "FeatureName":
        """Validate and normalize a raw feature name.

        Args:
            raw: User supplied name

        Returns:
            FeatureName holding the normalized value

        Raises:
            ValidationError: kind RESERVED for main/master, INVALID_FORMAT otherwise
        """
        if not isinstance(raw, str) or not raw:
            raise ValidationError("Name cannot be empty", ErrorKind.INVALID_FORMAT)

        normalized = cls.normalize(raw)
        if normalized in RESERVED_NAMES:
            raise ValidationError(
                f"Reserved name '{raw}' is not allowed as a worktree name", ErrorKind.RESERVED
            )

        if NAME_PATTERN.fullmatch(normalized) is None:
            raise ValidationError(
                f"Invalid name format '{raw}'. Names must match pattern: NNN-kebab-feature",
                ErrorKind.INVALID_FORMAT,
            )

        return cls(normalized)

    def __str__(self) -> str:
        return self.value
