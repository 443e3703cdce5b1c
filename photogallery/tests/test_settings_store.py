"""Tests for SettingsStore class."""

import os

from photogallery.settings_store import SETTINGS_FILENAME, SettingsStore, default_settings_dir


class TestSettingsStore:
    """Tests for SettingsStore class."""

    def test_default_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv('PHOTOGALLERY_HOME', str(tmp_path))

        assert default_settings_dir() == str(tmp_path)

    def test_default_dir_in_home(self, monkeypatch):
        monkeypatch.delenv('PHOTOGALLERY_HOME', raising=False)

        assert default_settings_dir() == os.path.join(os.path.expanduser('~'), '.photogallery')

    def test_empty_store(self, tmp_path):
        store = SettingsStore(str(tmp_path / 'settings'))

        assert store.load() == {}
        assert store.get('missing', 'fallback') == 'fallback'
        assert store.is_initialized() is False

    def test_set_creates_directory(self, tmp_path):
        directory = tmp_path / 'nested' / 'settings'
        store = SettingsStore(str(directory))

        store.set('theme', 'light')

        assert (directory / SETTINGS_FILENAME).read_text() == 'theme=light\n'
        assert store.get('theme') == 'light'

    def test_keys_written_sorted(self, tmp_path):
        store = SettingsStore(str(tmp_path))

        store.set('zeta', '1')
        store.set('alpha', '2')

        assert (tmp_path / SETTINGS_FILENAME).read_text() == 'alpha=2\nzeta=1\n'

    def test_ignores_comments_and_junk(self, tmp_path):
        (tmp_path / SETTINGS_FILENAME).write_text('# comment\n\nnonsense\nkey = a=b\n')

        assert SettingsStore(str(tmp_path)).load() == {'key': 'a=b'}

    def test_initialized_flag(self, tmp_path):
        """Test the first-run flag persists across instances."""
        SettingsStore(str(tmp_path)).set_initialized()

        assert SettingsStore(str(tmp_path)).is_initialized() is True
