"""
Tests for the layer name codec.

Covers:
- encode output format and tag validation
- decode of plain, tagged and malformed names
- Tag-equality classification (Texture vs Text)
- Re-encoding never stacks a second '@' segment
- Strict importer-style parse (parse_ui_element)
- LayerMetadata typed lookups
"""
import logging
import pytest

from models.metadata import LayerKind, LayerMetadata
from services.name_codec import (
    encode, decode, classify, classify_selection, parse_ui_element,
    strip_tag, tag_for_layer_kind, LayerNameError
)


# ══════════════════════════════════════════════════════════════════════════
# encode
# ══════════════════════════════════════════════════════════════════════════

class TestEncode:

    def test_image_with_size(self):
        assert encode("icon", LayerKind.IMAGE, {"size": [64, 64]}) == 'icon@Image:{"size":[64,64]}'

    def test_text_tag(self):
        assert encode("title", LayerKind.TEXT, {"size": [300, 40]}) == 'title@Text:{"size":[300,40]}'

    def test_tag_string_accepted(self):
        assert encode("logo", "Texture", {}) == "logo@Texture:{}"

    def test_none_properties_encode_as_empty_object(self):
        assert encode("icon", LayerKind.IMAGE) == "icon@Image:{}"

    def test_compact_json(self):
        name = encode("btn", LayerKind.IMAGE, {"size": [10, 20], "opacity": 50})
        assert " " not in name
        assert name == 'btn@Image:{"size":[10,20],"opacity":50}'

    def test_non_ascii_kept_verbatim(self):
        name = encode("标题", LayerKind.TEXT, {"label": "Spiel starten"})
        assert name == '标题@Text:{"label":"Spiel starten"}'

    def test_existing_tag_replaced(self):
        name = encode('icon@Image:{"size":[1,1]}', LayerKind.IMAGE, {"size": [64, 64]})
        assert name == 'icon@Image:{"size":[64,64]}'

    def test_unknown_tag_warns_but_encodes(self, caplog):
        with caplog.at_level(logging.WARNING):
            name = encode("w", "Widget", {})
        assert name == "w@Widget:{}"
        assert "Widget" in caplog.text

    @pytest.mark.parametrize("tag", ["", "Te xt", "A:B", "A@B", "9Lives", None, 5])
    def test_invalid_tag_rejected(self, tag):
        with pytest.raises(LayerNameError):
            encode("x", tag, {})

    def test_non_dict_properties_rejected(self):
        with pytest.raises(LayerNameError):
            encode("x", LayerKind.IMAGE, [64, 64])

    def test_unserialisable_properties_rejected(self):
        with pytest.raises(LayerNameError):
            encode("x", LayerKind.IMAGE, {"obj": object()})

    def test_nan_rejected(self):
        with pytest.raises(LayerNameError):
            encode("x", LayerKind.IMAGE, {"size": [float('nan'), 1]})

    def test_layer_name_error_is_value_error(self):
        assert issubclass(LayerNameError, ValueError)


# ══════════════════════════════════════════════════════════════════════════
# decode
# ══════════════════════════════════════════════════════════════════════════

class TestDecode:

    def test_plain_name(self):
        assert decode("background") == LayerMetadata("background", None, {})

    def test_empty_and_none(self):
        assert decode("") == LayerMetadata("", None, {})
        assert decode(None) == LayerMetadata("", None, {})

    def test_tag_without_properties(self):
        metadata = decode("caption@Text")
        assert metadata.base_name == "caption"
        assert metadata.kind == "Text"
        assert metadata.properties == {}

    def test_tag_with_empty_payload(self):
        assert decode("caption@Text:").properties == {}

    def test_properties(self):
        metadata = decode('icon@Image:{"size":[64,64]}')
        assert metadata.base_name == "icon"
        assert metadata.kind == "Image"
        assert metadata.properties == {"size": [64, 64]}
        assert metadata.is_tagged

    def test_malformed_json_gives_empty_properties(self):
        metadata = decode('icon@Image:{"size":[64,')
        assert metadata.base_name == "icon"
        assert metadata.kind == "Image"
        assert metadata.properties == {}

    def test_non_object_json_gives_empty_properties(self):
        assert decode("icon@Image:[64,64]").properties == {}

    def test_colon_in_base_name(self):
        metadata = decode("x:y@Text:{}")
        assert metadata.base_name == "x:y"
        assert metadata.kind == "Text"

    def test_json_may_contain_delimiters(self):
        name = encode("label", LayerKind.TEXT, {"text": "mail@host: hi"})
        metadata = decode(name)
        assert metadata.base_name == "label"
        assert metadata.kind == "Text"
        assert metadata.properties == {"text": "mail@host: hi"}

    @pytest.mark.parametrize("kind", [LayerKind.TEXT, LayerKind.IMAGE])
    @pytest.mark.parametrize("base_name,properties", [
        ("Start Game", {}),
        ("icon", {"size": [128, 32], "nested": {"a": [1, 2.5, None, True]}}),
        ("标题", {"label": "Spiel stärten", "hint": "ボタン"}),
        ("x:y", {"text": "mail@host: hi", "url": "a:b@c"}),
    ])
    def test_round_trip(self, kind, base_name, properties):
        metadata = decode(encode(base_name, kind, properties))
        assert metadata == LayerMetadata(base_name, kind.tag, properties)


class TestStripTag:

    def test_plain(self):
        assert strip_tag("icon") == "icon"

    def test_tagged(self):
        assert strip_tag('icon@Image:{"size":[1,1]}') == "icon"

    def test_reencode_keeps_single_segment(self):
        name = "icon"
        for kind in (LayerKind.IMAGE, LayerKind.TEXT, LayerKind.IMAGE):
            name = encode(name, kind, {"size": [64, 64]})
            assert name.count("@") == 1
        assert decode(name).base_name == "icon"

    def test_tag_for_layer_kind(self):
        assert tag_for_layer_kind("text") is LayerKind.TEXT
        assert tag_for_layer_kind("pixel") is LayerKind.IMAGE
        assert tag_for_layer_kind("smartObject") is LayerKind.IMAGE


# ══════════════════════════════════════════════════════════════════════════
# classify
# ══════════════════════════════════════════════════════════════════════════

class TestClassify:

    @pytest.mark.parametrize("name,expected", [
        ('title@Text:{"size":[300,40]}', "text"),
        ("caption@Text", "text"),
        ("x@Texture:{}", "texture"),
        ('logo@Texture:{"size":[128,128]}', "texture"),
        ('icon@Image:{"size":[64,64]}', "default"),
        ("background", "default"),
        ("", "default"),
        (None, "default"),
    ])
    def test_classification(self, name, expected):
        assert classify(name) == expected

    def test_texture_is_not_text(self):
        # '@Text' is a prefix of '@Texture'
        assert classify("x@Texture:{}") != "text"

    def test_case_insensitive(self):
        assert classify("a@text:{}") == "text"
        assert classify("a@TEXTURE") == "texture"

    def test_similar_tags_are_default(self):
        assert classify("a@TextBox:{}") == "default"
        assert classify("a@Tex:{}") == "default"

    def test_tag_inside_json_is_ignored(self):
        assert classify('a@Image:{"note":"@Text"}') == "default"

    def test_selection_uses_primary(self):
        assert classify_selection(["x@Texture:{}", "y@Text:{}"]) == "texture"
        assert classify_selection(["plain", "y@Text:{}"]) == "default"

    def test_empty_selection(self):
        assert classify_selection([]) == "default"


# ══════════════════════════════════════════════════════════════════════════
# parse_ui_element
# ══════════════════════════════════════════════════════════════════════════

class TestParseUIElement:

    def test_untagged_is_none(self):
        assert parse_ui_element("background") is None

    def test_empty_tag_is_none(self):
        assert parse_ui_element("name@:{}") is None

    def test_tag_only(self):
        assert parse_ui_element("btn@Button") == LayerMetadata("btn", "Button", {})

    def test_empty_payload(self):
        assert parse_ui_element("btn@Button:") == LayerMetadata("btn", "Button", {})

    def test_valid(self):
        metadata = parse_ui_element('bar@Slider:{"size":[200,16]}')
        assert metadata.kind == "Slider"
        assert metadata.size == (200, 16)

    def test_malformed_json_is_none(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_ui_element('bar@Slider:{"size":') is None
        assert "JSON parse error" in caplog.text

    def test_non_object_json_is_none(self):
        assert parse_ui_element("bar@Slider:[1,2]") is None


# ══════════════════════════════════════════════════════════════════════════
# LayerMetadata
# ══════════════════════════════════════════════════════════════════════════

class TestLayerMetadata:

    def test_untagged(self):
        assert not LayerMetadata("plain").is_tagged

    @pytest.mark.parametrize("raw,expected", [
        ([64, 64], (64, 64)),
        ([0.5, 2], (0.5, 2)),
        ([0, 10], (0, 10)),
        ([0, 0], None),
        ([64], None),
        ([1, 2, 3], None),
        (["a", "b"], None),
        ([True, 2], None),
        ("64x64", None),
    ])
    def test_size(self, raw, expected):
        assert LayerMetadata("x", "Image", {"size": raw}).size == expected

    def test_size_missing(self):
        assert LayerMetadata("x", "Image", {}).size is None

    def test_get_param_default(self):
        metadata = LayerMetadata("x", "Image", {"opacity": 50})
        assert metadata.get_param("missing", 7) == 7
        assert metadata.get_param("opacity") == 50

    def test_get_param_type_mismatch(self):
        metadata = LayerMetadata("x", "Image", {"opacity": "half"})
        assert metadata.get_param("opacity", 100, int) == 100

    def test_get_param_bool_is_not_a_number(self):
        metadata = LayerMetadata("x", "Toggle", {"value": True})
        assert metadata.get_param("value", 0, (int, float)) == 0
        assert metadata.get_param("value", False, bool) is True
