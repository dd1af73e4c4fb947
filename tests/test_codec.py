"""
-------
test_codec.py
-------
"""

import pytest

from pattern import (
    DEFAULT_PALETTE,
    Color,
    ParameterSet,
    decode,
    encode,
    parse,
    reconstruct_colors,
)
from pattern.codec import KEY_ORDER
from shapes import ShapeKind


def test_star_example_encoding(star_params) -> None:
    s = encode(star_params)
    assert s.startswith("shape:star;rotation:45.0;scale:1.2;layer:3.0;")
    assert ";primitive:2.0;" in s
    assert ";spread:10.0;" in s


def test_key_order_is_stable(rich_params) -> None:
    keys = [pair.split(":", 1)[0] for pair in encode(rich_params).split(";")]
    assert keys == list(KEY_ORDER)


def test_integral_keys_have_no_fraction(rich_params) -> None:
    fields = decode(encode(rich_params))
    assert fields["rainbowStyle"] == "2"
    assert fields["presetCount"] == "7"


def test_colors_encode_as_uppercase_hex(rich_params) -> None:
    fields = decode(encode(rich_params))
    assert fields["colors"].split(",")[-1] == "#ABCDEF"
    assert fields["background"] == "#222222"
    assert fields["strokeColor"] == "#FAFAFA"
    assert fields["useRainbow"] == "true"


def test_roundtrip_rich(rich_params) -> None:
    assert parse(encode(rich_params)) == rich_params


def test_roundtrip_defaults() -> None:
    assert parse(encode(ParameterSet())) == ParameterSet()


def test_roundtrip_star(star_params) -> None:
    assert parse(encode(star_params)) == star_params


def test_encode_clamps_out_of_range() -> None:
    p = ParameterSet(rotation=999.0, scale=-3.0, layer_count=500, primitive_count=0,
                     stroke_width=50.0, shape_alpha=1.7, horizontal=-1000.0)
    fields = decode(encode(p))
    assert fields["rotation"] == "360.0"
    assert fields["scale"] == "0.5"
    assert fields["layer"] == "360.0"
    assert fields["primitive"] == "1.0"
    assert fields["strokeWidth"] == "20.0"
    assert fields["alpha"] == "1.0"
    assert fields["horizontal"] == "-300.0"


def test_clamping_is_idempotent() -> None:
    p = ParameterSet(rotation=-20.0, scale=9.0, skew_x=300.0, vertical=301.0,
                     rainbow_style=11, visible_preset_count=0, hue_adjustment=2.0)
    once = parse(encode(p))
    twice = parse(encode(once))
    assert once == twice
    assert encode(once) == encode(twice)


@pytest.mark.parametrize(
    "entry, key, expected",
    [
        ("rotation:400", "rotation", "360.0"),
        ("rotation: 45 ", "rotation", "45.0"),
        ("scale:0.1", "scale", "0.5"),
        ("layer:-4", "layer", "0.0"),
        ("rainbowStyle:7", "rainbowStyle", "2"),
        ("presetCount:0", "presetCount", "1"),
        ("presetCount:3.7", "presetCount", "3"),
        ("skewY:inf", "skewY", "100.0"),
    ],
)
def test_decode_clamps_numeric(entry, key, expected) -> None:
    assert decode(entry)[key] == expected


def test_decode_drops_malformed_entries() -> None:
    fields = decode("garbage;rotation:10;:5;;bar:baz;scale:abc;spread:nan")
    assert fields == {"rotation": "10.0", "bar": "baz"}


def test_decode_splits_on_first_colon() -> None:
    assert decode("note:a:b;x:1")["note"] == "a:b"


def test_decode_does_not_pad_palette() -> None:
    assert decode("colors:#FF0000,#00FF00")["colors"] == "#FF0000,#00FF00"


def test_parse_pads_short_palette() -> None:
    p = parse("colors:#FF0000,#00FF00")
    assert len(p.color_presets) == 10
    assert p.color_presets[0].to_hex() == "#FF0000"
    assert p.color_presets[1].to_hex() == "#00FF00"
    assert p.color_presets[2:] == DEFAULT_PALETTE[2:]


def test_parse_truncates_long_palette() -> None:
    hexes = [f"#0000{i:02X}" for i in range(12)]
    p = parse("colors:" + ",".join(hexes))
    assert [c.to_hex() for c in p.color_presets] == hexes[:10]


def test_parse_empty_palette_keeps_base(rich_params) -> None:
    p = parse("colors:zzz,", base=rich_params)
    assert p.color_presets == rich_params.color_presets


def test_unknown_shape_falls_back_to_circle() -> None:
    assert parse("shape:blob").shape_kind == ShapeKind.CIRCLE
    assert parse("shape: hexagon ").shape_kind == ShapeKind.HEXAGON


def test_hex_tolerance() -> None:
    assert Color.from_hex(" ff2d55 ").to_hex() == "#FF2D55"
    assert Color.from_hex("#00c7be").to_hex() == "#00C7BE"
    assert Color.from_hex("#12345") is None
    assert Color.from_hex("#GGGGGG") is None
    assert Color.from_hex("") is None


def test_reconstruct_colors_drops_bad_entries() -> None:
    colors = reconstruct_colors("#FF0000, bogus ,00ff00,")
    assert [c.to_hex() for c in colors] == ["#FF0000", "#00FF00"]


def test_extras_are_preserved_verbatim() -> None:
    p = parse("shape:star;custom:Hello World ;rotation:10")
    assert p.extras == {"custom": "Hello World "}
    s = encode(p)
    assert s.endswith(";custom:Hello World ")
    assert parse(s).extras == p.extras


def test_extras_never_shadow_known_keys() -> None:
    p = ParameterSet()
    p.extras = {"shape": "star", "mood": "calm"}
    s = encode(p)
    assert s.count("shape:") == 1
    assert "shape:circle" in s
    assert s.endswith(";mood:calm")


def test_missing_fields_keep_base(rich_params) -> None:
    p = parse("rotation:10", base=rich_params)
    expected = rich_params.copy()
    expected.rotation = 10.0
    assert p == expected
    # base is untouched
    assert rich_params.rotation == 33.5


def test_rainbow_flag_parsing(rich_params) -> None:
    assert parse("useRainbow: TRUE ").use_rainbow_colors is True
    assert parse("useRainbow:false", base=rich_params).use_rainbow_colors is False
    assert parse("useRainbow:maybe", base=rich_params).use_rainbow_colors is True


def test_bad_background_keeps_base(rich_params) -> None:
    p = parse("background:not-a-color;strokeColor:#010203", base=rich_params)
    assert p.background_color == rich_params.background_color
    assert p.stroke_color.to_hex() == "#010203"


def test_parsed_numbers_are_typed() -> None:
    p = parse("layer:7.9;primitive:3;rainbowStyle:1")
    assert p.layer_count == 7 and isinstance(p.layer_count, int)
    assert p.primitive_count == 3 and isinstance(p.primitive_count, int)
    assert p.rainbow_style == 1


def test_encode_replaces_nan_with_range_floor() -> None:
    p = ParameterSet(rotation=float("nan"), scale=float("nan"), visible_preset_count=float("nan"))
    fields = decode(encode(p))
    assert fields["rotation"] == "0.0"
    assert fields["scale"] == "0.5"
    assert fields["presetCount"] == "1"
    assert "nan" not in encode(p)


def test_set_field_nan_on_integral_field() -> None:
    p = ParameterSet()
    p.set_field("rainbowStyle", float("nan"))
    assert p.rainbow_style == 0
    p.set_field("primitive", float("nan"))
    assert p.primitive_count == 1
