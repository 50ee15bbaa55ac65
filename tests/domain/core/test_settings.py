# tests/domain/core/test_settings.py
import pytest

from rational3d.domain.core.exceptions import ConfigurationError, UnsupportedPrecisionError
from rational3d.domain.core.numbers import RoundingMode
from rational3d.domain.core.settings import (
    PrecisionSettings,
    configure,
    get_settings,
    reset_settings,
    resolve_precision,
    validate_oom,
)
from rational3d.domain.geometry.constants import DEFAULT_OOM, DEFAULT_ROUNDING, MAX_OOM, MIN_OOM


@pytest.fixture
def restore_settings():
    yield
    reset_settings()


class TestPrecisionSettings:
    """Test cases for precision configuration."""

    def test_defaults(self):
        settings = PrecisionSettings()
        assert settings.default_oom == DEFAULT_OOM
        assert settings.default_rounding == DEFAULT_ROUNDING
        assert settings.min_oom == MIN_OOM
        assert settings.max_oom == MAX_OOM

    def test_from_env(self):
        settings = PrecisionSettings.from_env({
            "RATIONAL3D_DEFAULT_OOM": "-6",
            "RATIONAL3D_DEFAULT_ROUNDING": "half_even",
            "RATIONAL3D_MIN_OOM": "-50",
            "RATIONAL3D_MAX_OOM": "10",
        })
        assert settings.default_oom == -6
        assert settings.default_rounding is RoundingMode.HALF_EVEN
        assert settings.min_oom == -50
        assert settings.max_oom == 10

    def test_from_env_ignores_missing_keys(self):
        assert PrecisionSettings.from_env({}) == PrecisionSettings()

    def test_bad_integer(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PrecisionSettings.from_env({"RATIONAL3D_DEFAULT_OOM": "three"})
        assert exc_info.value.key == "RATIONAL3D_DEFAULT_OOM"
        assert exc_info.value.value == "three"

    def test_bad_rounding(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PrecisionSettings.from_env({"RATIONAL3D_DEFAULT_ROUNDING": "NEAREST"})
        assert "HALF_EVEN" in str(exc_info.value)

    def test_inverted_bounds(self):
        with pytest.raises(ConfigurationError):
            PrecisionSettings(min_oom=5, max_oom=-5, default_oom=0)

    def test_default_out_of_bounds(self):
        with pytest.raises(ConfigurationError):
            PrecisionSettings.from_env({"RATIONAL3D_MIN_OOM": "-2"})


class TestPrecisionResolution:
    """Test cases for filling in and validating precision arguments."""

    def test_defaults_fill_missing_arguments(self, restore_settings):
        configure(PrecisionSettings(default_oom=-4, default_rounding=RoundingMode.FLOOR))
        assert resolve_precision() == (-4, RoundingMode.FLOOR)
        assert resolve_precision(-2) == (-2, RoundingMode.FLOOR)
        assert resolve_precision(None, RoundingMode.UP) == (-4, RoundingMode.UP)

    def test_rounding_given_as_decimal_constant(self, restore_settings):
        configure(PrecisionSettings())
        assert resolve_precision(-1, "ROUND_HALF_EVEN") == (-1, RoundingMode.HALF_EVEN)

    def test_unknown_rounding(self, restore_settings):
        configure(PrecisionSettings())
        with pytest.raises(UnsupportedPrecisionError):
            resolve_precision(-1, "NEAREST")

    def test_configure_and_reset(self, restore_settings):
        custom = PrecisionSettings(default_oom=-8)
        configure(custom)
        assert get_settings() is custom
        reset_settings()
        assert get_settings() is not custom

    @pytest.mark.parametrize("oom", [MAX_OOM + 1, MIN_OOM - 1, 1.5, True, "-3"])
    def test_unsupported_oom(self, oom):
        with pytest.raises(UnsupportedPrecisionError):
            validate_oom(oom, PrecisionSettings())

    def test_supported_oom(self):
        assert validate_oom(-3, PrecisionSettings()) == -3
