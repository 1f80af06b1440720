from pathlib import Path

import click
import pytest

from src.jpeg_check.cli_utils import AttachedValue


def test_attached_value_drops_one_equals_sign() -> None:
    path_type = AttachedValue(click.Path(dir_okay=False, path_type=Path))
    assert path_type.convert("=out.jpg", None, None) == Path("out.jpg")
    assert path_type.convert("out.jpg", None, None) == Path("out.jpg")
    assert path_type.convert("==odd.jpg", None, None) == Path("=odd.jpg")


def test_attached_value_delegates_validation() -> None:
    int_type = AttachedValue(click.IntRange(min=0))
    assert int_type.convert("=7", None, None) == 7
    assert int_type.name == click.IntRange(min=0).name
    with pytest.raises(click.BadParameter):
        int_type.convert("=x", None, None)
