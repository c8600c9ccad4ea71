import pytest

from dotf.resources import BitmapId, IconId, SoundId


@pytest.mark.parametrize(
    "enum_cls, low, high",
    [(IconId, 1000, 1999), (BitmapId, 2000, 2999), (SoundId, 3000, 3999)],
)
def test_identifiers_stay_in_their_range(enum_cls, low, high):
    assert all(low <= member.value <= high for member in enum_cls)


def _kinds_matching(value):
    matches = []
    for lookup in (IconId, BitmapId, SoundId):
        try:
            matches.append(lookup(value))
        except ValueError:
            pass
    return matches


def test_identifiers_are_unique_across_kinds():
    values = [m.value for cls in (IconId, BitmapId, SoundId) for m in cls]
    assert len(values) == len(set(values))
    for value in values:
        matches = _kinds_matching(value)
        assert len(matches) == 1
        assert matches[0].value == value


def test_lookup_by_value():
    assert BitmapId(2010) is BitmapId.WALL_1
    assert SoundId(3010) is SoundId.CONSTROBOT_1
    assert IconId(1001) is IconId.DOTF_SM


def test_unknown_value_raises():
    with pytest.raises(ValueError):
        BitmapId(2005)