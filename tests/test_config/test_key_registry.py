"""Tests for key registry loading."""

import pytest

from ergobox.config.key_registry import load_key_registry, parse_key_registry
from ergobox.core.errors import ConfigError


CUSTOM_REGISTRY = """\
groups:
  - title: Tiny
    sections:
      - title: Keys
        items:
          - {label: Hyper, zmk: "&kp LS(LC(LA(LG(H))))", qmk: HYPR(KC_H), aliases: [hyp]}
          - {label: Esc, zmk: "&kp ESC", qmk: KC_ESC}
"""


class TestLoadKeyRegistry:
    def test_bundled_registry(self):
        registry = load_key_registry()

        assert len(registry) > 90
        assert registry.find("Vol+").qmk == "KC_VOLU"
        assert registry.find("KC_AUDIO_VOL_UP").label == "Vol+"

    def test_custom_file(self, tmp_path):
        path = tmp_path / "keys.yaml"
        path.write_text(CUSTOM_REGISTRY, encoding="utf-8")

        registry = load_key_registry(path)

        assert [group.title for group in registry.groups] == ["Tiny"]
        assert registry.find("hyp").label == "Hyper"
        assert registry.find("A") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read key registry"):
            load_key_registry(tmp_path / "nope.yaml")


class TestParseKeyRegistry:
    @pytest.mark.parametrize(
        "text",
        [
            "groups: [unclosed",
            "items: []\n",
            "groups:\n  - sections: []\n",
            "- just\n- a list\n",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(ConfigError):
            parse_key_registry(text, "bad.yaml")
