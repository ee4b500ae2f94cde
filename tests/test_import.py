"""Verify package imports work correctly."""


def test_import_richspan() -> None:
    """Test that richspan can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import richspan

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert richspan.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from richspan import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    import richspan

    for name in richspan.__all__:
        assert hasattr(richspan, name), name
