from unittest.mock import MagicMock

import pytest

from services import session


class _State(dict):
    """dict with attribute access, like st.session_state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def st(monkeypatch):
    fake = MagicMock()
    fake.session_state = _State()
    monkeypatch.setattr(session, "st", fake)
    return fake


def test_sign_in_and_out(st):
    user = session.sign_in("tok", {"id": "u1", "email": "a@b.test", "role": "dancer", "name": "Ana"})
    assert session.is_authenticated()
    assert session.current_user() is user
    assert session.client().token == "tok"
    session.update_user(level="Level 2")
    assert session.current_user().level == "Level 2"
    session.sign_out()
    assert not session.is_authenticated()
    assert session.client().token is None


def test_navigate_stores_target_and_params(st):
    session.navigate("absence", event="e1", name="Ana", level=None)
    assert st.session_state.nav_target == "absence"
    assert st.session_state.nav_params == {"event": "e1", "name": "Ana"}
    st.rerun.assert_called_once()


def test_expire_signs_out_and_flashes(st):
    session.sign_in("tok", {"id": "u1", "email": "a@b.test", "role": "judge"})
    session.expire()
    assert session.token() is None
    assert st.session_state.nav_target == "login"
    kind, message = st.session_state[session.FLASH_KEY][0]
    assert kind == "error"
    assert "expired" in message


def test_show_flashes_drains_queue(st):
    session.flash("Saved!")
    session.show_flashes()
    st.toast.assert_called_once_with("Saved!", icon="✅")
    assert session.FLASH_KEY not in st.session_state
