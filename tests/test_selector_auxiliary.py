import pytest

from src.jpeg_check.errors import InvalidSelectorError, SelectorSyntaxError
from src.jpeg_check.selectors import (
    ORIENTATION_CODES,
    PictureSaveSelector,
    Side,
    ThumbnailSelector,
    parse_picture_save,
    parse_thumbnails,
)


def test_thumbnails_keep_input_order() -> None:
    assert parse_thumbnails("1:/tmp/preview.jpg,0:thumb.jpg") == [
        ThumbnailSelector(1, "/tmp/preview.jpg"),
        ThumbnailSelector(0, "thumb.jpg"),
    ]


@pytest.mark.parametrize("value", ["2:/tmp/x", "-1:/tmp/x", "a:/tmp/x", "0", "0:a:b", "0:", ":x"])
def test_thumbnails_reject(value: str) -> None:
    with pytest.raises(InvalidSelectorError) as excinfo:
        parse_thumbnails(value)
    assert excinfo.value.option == "-sthumb"


def test_picture_path_only_leaves_orientation_unset() -> None:
    selector = parse_picture_save("out/picture.jpg")
    assert selector == PictureSaveSelector("out/picture.jpg")
    assert selector.orientation is None
    assert selector.row_zero_side is None
    assert selector.col_zero_side is None
    assert selector.monochrome is False


def test_picture_orientation_and_format() -> None:
    selector = parse_picture_save("rt,bw:rotated.jpg")
    assert selector.path == "rotated.jpg"
    assert selector.row_zero_side is Side.RIGHT
    assert selector.col_zero_side is Side.TOP
    assert selector.monochrome is True


def test_picture_orientation_without_format_is_colour() -> None:
    selector = parse_picture_save("lb:out.jpg")
    assert selector.orientation == (Side.LEFT, Side.BOTTOM)
    assert selector.monochrome is False
    assert parse_picture_save("tl,co:out.jpg").monochrome is False


def test_orientation_codes_are_a_closed_set_of_distinct_pairs() -> None:
    assert len(ORIENTATION_CODES) == 8
    assert len(set(ORIENTATION_CODES.values())) == 8
    for row_side, col_side in ORIENTATION_CODES.values():
        vertical = {Side.TOP, Side.BOTTOM}
        assert (row_side in vertical) != (col_side in vertical)


@pytest.mark.parametrize("value", ["xx:out.jpg", "tl,gray:out.jpg", ":out.jpg", "tl,:out.jpg", "tl:", ""])
def test_picture_rejects_unknown_tokens(value: str) -> None:
    with pytest.raises(InvalidSelectorError):
        parse_picture_save(value)


@pytest.mark.parametrize("value", ["tl:a:b", "tl,bw,x:out.jpg"])
def test_picture_rejects_extra_delimiters(value: str) -> None:
    with pytest.raises(SelectorSyntaxError):
        parse_picture_save(value)
