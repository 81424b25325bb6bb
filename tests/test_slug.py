import pytest

from apps.blog.slug import slugify


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Hello, World!", "hello-world"),
        ("  multiple   spaces  ", "multiple-spaces"),
        ("---trim---", "trim"),
        ("Already-a-slug", "already-a-slug"),
        ("snake_case stays", "snake_case-stays"),
        ("Tabs\tand\nnewlines", "tabs-and-newlines"),
        ("a - b -- c", "a-b-c"),
        ("Café au lait", "caf-au-lait"),
        ("!!!", ""),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_accepts_non_strings():
    assert slugify(2024) == "2024"
