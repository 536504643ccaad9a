"""Tests for feature name validation"""
import pytest

from git_worktrees.exceptions import ErrorKind, ValidationError
from git_worktrees.models.feature_name import FeatureName


class TestFeatureNameValidate:
    """Test FeatureName.validate."""

    @pytest.mark.parametrize("raw", [
        "001-login",
        "123-a",
        "999-multi-part-name",
        "042-v2-api",
        "000-" + "a" * 40,
    ])
    def test_accepts_conforming_names(self, raw):
        """Names matching NNN-slug are accepted unchanged."""
        assert FeatureName.validate(raw).value == raw

    def test_normalizes_to_lowercase(self):
        """Upper-case input is lower-cased before matching."""
        name = FeatureName.validate("001-Login-Page")
        assert name.value == "001-login-page"
        assert str(name) == "001-login-page"

    @pytest.mark.parametrize("raw", [
        "login",
        "01-login",
        "0001-login",
        "001_login",
        "001-",
        "001-login page",
        "001-login_page",
        "abc-login",
        "001-" + "a" * 41,
        "001-login\n",
        "feature/001-login",
    ])
    def test_rejects_malformed_names(self, raw):
        """Anything outside the pattern is INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            FeatureName.validate(raw)
        assert exc_info.value.kind == ErrorKind.INVALID_FORMAT

    def test_rejects_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            FeatureName.validate("")
        assert exc_info.value.kind == ErrorKind.INVALID_FORMAT

    @pytest.mark.parametrize("raw", ["main", "master", "MAIN", "Master"])
    def test_reserved_names(self, raw):
        """main/master are RESERVED in any case, not INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            FeatureName.validate(raw)
        assert exc_info.value.kind == ErrorKind.RESERVED

    def test_reserved_word_inside_name_is_allowed(self):
        """Only the whole name is reserved."""
        assert FeatureName.validate("001-main").value == "001-main"
        assert FeatureName.validate("002-master-fix").value == "002-master-fix"

    def test_feature_name_is_immutable(self):
        name = FeatureName.validate("001-login")
        with pytest.raises(AttributeError):
            name.value = "002-other"


class TestFeatureNameFormat:
    """Test the lenient format check used by the registry."""

    def test_is_valid_format(self):
        assert FeatureName.is_valid_format("001-login")
        assert FeatureName.is_valid_format("001-LOGIN")
        assert not FeatureName.is_valid_format("main")
        assert not FeatureName.is_valid_format("repo")
        assert not FeatureName.is_valid_format(None)

    def test_validate_iff_format_and_not_reserved(self):
        """validate succeeds exactly when the format holds and the name is not reserved."""
        samples = ["001-a", "main", "MASTER", "1-a", "001-A", "001--", "xyz", "123-main"]
        for raw in samples:
            expected = FeatureName.is_valid_format(raw) and raw.lower() not in {"main", "master"}
            try:
                FeatureName.validate(raw)
                accepted = True
            except ValidationError:
                accepted = False
            assert accepted == expected, raw
