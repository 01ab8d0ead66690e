import pytest
from unittest.mock import patch, MagicMock

# Mock streamlit before importing the app
st_mock = MagicMock()


def _registry():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import PAGE_REGISTRY
    return PAGE_REGISTRY


def test_page_registry_structure():
    """
    Tests that the PAGE_REGISTRY has the correct structure.
    """
    registry = _registry()
    assert isinstance(registry, dict)
    for key, value in registry.items():
        assert "label" in value
        assert "render_func" in value
        assert "admin" in value
        assert "role" in value
        assert callable(value["render_func"])
        assert isinstance(value["admin"], bool)


def test_admin_pages_are_correctly_flagged():
    """
    Tests that admin-only pages are exactly the ones guarded by the admin role.
    """
    registry = _registry()
    admin_pages = [key for key, value in registry.items() if value["admin"]]
    assert sorted(admin_pages) == ["admin", "audition", "deliberations", "recording"]
    for key in admin_pages:
        assert registry[key]["role"] == "admin"


def test_public_pages_need_no_login():
    registry = _registry()
    public = [key for key, value in registry.items() if value["role"] is None]
    expected = ["landing", "login", "dancer_login", "org_signup", "register", "attendance", "absence"]
    assert sorted(public) == sorted(expected)


def test_labels_are_unique():
    registry = _registry()
    labels = [v["label"] for v in registry.values()]
    assert len(labels) == len(set(labels))
