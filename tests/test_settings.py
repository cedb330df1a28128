from resource_query.settings import Settings


def test_defaults_when_environment_is_empty(monkeypatch):
    for name in ("MONGO_URI", "MONGO_DATABASE", "GEOCODER_API_KEY", "DEFAULT_RADIUS_KM", "API_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.mongo_uri == "mongodb://localhost:27017"
    assert settings.geocoder_api_key is None
    assert settings.default_radius_km == 10.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONGO_DATABASE", "marketplace")
    monkeypatch.setenv("GEOCODER_API_KEY", "secret")
    monkeypatch.setenv("DEFAULT_RADIUS_KM", "25")
    monkeypatch.setenv("API_PORT", "8080")

    settings = Settings.from_env()

    assert settings.mongo_database == "marketplace"
    assert settings.geocoder_api_key == "secret"
    assert settings.default_radius_km == 25.0
    assert settings.api_port == 8080
