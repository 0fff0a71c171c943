from jobseeker.config import settings
from jobseeker.services.cache_service import ThemePreference


class TestTheme:
    def test_defaults_to_light(self, client):
        r = client.get("/api/v1/preferences/theme")
        assert r.status_code == 200
        assert r.json() == {"theme": "light", "is_dark": False}

    def test_toggle(self, client):
        r = client.post("/api/v1/preferences/theme/toggle")
        assert r.json() == {"theme": "dark", "is_dark": True}
        r = client.post("/api/v1/preferences/theme/toggle")
        assert r.json() == {"theme": "light", "is_dark": False}

    def test_choice_is_persisted(self, client, platform):
        client.post("/api/v1/preferences/theme/toggle")
        reloaded = ThemePreference(platform.cache, settings.theme_cache_key)
        assert reloaded.load() == "dark"

    def test_unknown_saved_value_falls_back(self, platform):
        platform.cache.set_item(settings.theme_cache_key, "sepia")
        assert ThemePreference(platform.cache, settings.theme_cache_key).load() == "light"

    def test_no_sign_in_needed(self, client):
        assert client.get("/api/v1/preferences/theme").status_code == 200
