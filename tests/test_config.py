import pytest

from prepmate.config import (
    ExtractionSettings,
    get_authority,
    is_valid_player_id,
    iter_authorities,
    load_settings,
    resolve_authority,
)
from prepmate.config_loader import SettingsProfile


def test_get_authority_handles_lowercase():
    authority = get_authority("fide")
    assert authority.code == "FIDE"
    assert authority.url_for("123") == "https://ratings.fide.com/profile/123"


def test_get_authority_missing_raises():
    with pytest.raises(KeyError):
        get_authority("ECF")


@pytest.mark.parametrize(
    "identifier, code, player_id",
    [
        ("1234567", "USCF", "1234567"),
        ("12345678", "USCF", "12345678"),
        ("fide_2000000", "FIDE", "2000000"),
        ("123456", "FIDE", "123456"),
    ],
)
def test_resolve_authority_by_identifier_shape(identifier, code, player_id):
    authority, resolved_id = resolve_authority(identifier)
    assert authority.code == code
    assert resolved_id == player_id


@pytest.mark.parametrize("identifier", ["", "12345", "magnus", "fide_", "123456789"])
def test_unroutable_identifiers(identifier):
    assert resolve_authority(identifier) is None
    assert not is_valid_player_id(identifier)


def test_iter_authorities_lists_all_codes():
    assert {authority.code for authority in iter_authorities()} == {"USCF", "FIDE"}


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("PREPMATE_CACHE_TTL", "120")
    monkeypatch.setenv("PREPMATE_HISTORY_YEARS", "50")
    monkeypatch.setenv("PREPMATE_PEAK_MARGIN", "not-a-number")
    settings = load_settings()
    assert settings.cache_ttl_seconds == 120.0
    assert settings.history_years == 20
    assert settings.peak_anomaly_margin == 20


def test_with_overrides_clamps_and_ignores_unknown_keys():
    settings = ExtractionSettings().with_overrides({"history_years": 0, "bogus": 1, "synthetic_bounds": [900, 2900]})
    assert settings.history_years == 1
    assert settings.synthetic_bounds == (900, 2900)


def test_settings_profile_round_trip(tmp_path):
    settings = ExtractionSettings(history_years=6, peak_anomaly_margin=35)
    path = tmp_path / "settings.json"
    SettingsProfile.from_settings(settings).save(path)

    loaded = SettingsProfile.load(path)
    assert loaded.overrides == {"history_years": 6, "peak_anomaly_margin": 35}
    assert loaded.apply(ExtractionSettings()) == settings


def test_with_overrides_coerces_and_rejects_bad_values():
    settings = ExtractionSettings().with_overrides({"cache_ttl_seconds": 30, "trend_threshold": "75"})
    assert settings.cache_ttl_seconds == 30.0
    assert settings.trend_threshold == 75

    with pytest.raises(ValueError, match="history_years"):
        ExtractionSettings().with_overrides({"history_years": "abc"})


def test_settings_profile_requires_object(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        SettingsProfile.load(path)
