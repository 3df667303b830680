"""Tests for trailhead.redirect — redirect signal and boundary."""

import anyio
import pytest

from trailhead.context import provide_history
from trailhead.history.coordinator import HistoryCoordinator
from trailhead.redirect import RedirectBoundary, RedirectRequest, is_redirect, redirect_to
from trailhead.testing import MemoryLocationStore


class TestSignal:
    def test_redirect_to_raises(self) -> None:
        with pytest.raises(RedirectRequest) as exc_info:
            redirect_to("/login")
        assert exc_info.value.uri == "/login"

    def test_not_an_ordinary_exception(self) -> None:
        assert not issubclass(RedirectRequest, Exception)
        assert issubclass(RedirectRequest, BaseException)

    def test_survives_except_exception(self) -> None:
        def handler() -> str:
            try:
                redirect_to("/login")
            except Exception:
                return "swallowed"
            return "unreachable"

        with pytest.raises(RedirectRequest):
            handler()

    def test_is_redirect(self) -> None:
        assert is_redirect(RedirectRequest("/x")) is True
        assert is_redirect(ValueError("/x")) is False
        assert is_redirect("/x") is False


class TestBoundary:
    def test_redirect_becomes_one_replace(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        with RedirectBoundary(history):
            redirect_to("/login")

        assert store.navigations == [("REPLACE", "/login")]
        assert store.location.pathname == "/login"

    def test_other_errors_pass_through_unchanged(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        error = ValueError("handler bug")
        with pytest.raises(ValueError) as exc_info, RedirectBoundary(history):
            raise error

        assert exc_info.value is error
        assert store.navigations == []

    def test_nested_boundaries_navigate_once(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        with RedirectBoundary(history), RedirectBoundary(history):
            redirect_to("/login")

        assert store.navigations == [("REPLACE", "/login")]

    def test_reraised_signal_is_not_navigated_twice(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        signal = RedirectRequest("/login")
        with RedirectBoundary(history):
            with RedirectBoundary(history):
                raise signal
            raise signal

        assert store.navigations == [("REPLACE", "/login")]
        assert signal.handled is True

    def test_render_returns_value(self, history: HistoryCoordinator) -> None:
        assert RedirectBoundary(history).render(lambda x: x * 2, 21) == 42

    def test_render_returns_none_on_redirect(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        result = RedirectBoundary(history).render(redirect_to, "/elsewhere")

        assert result is None
        assert store.navigations == [("REPLACE", "/elsewhere")]

    def test_uses_active_history(self, store: MemoryLocationStore) -> None:
        history = HistoryCoordinator(store)
        boundary = RedirectBoundary()
        with provide_history(history), boundary:
            redirect_to("/ctx")

        assert store.navigations == [("REPLACE", "/ctx")]

    def test_without_history_raises_lookup_error(self) -> None:
        with pytest.raises(LookupError), RedirectBoundary():
            redirect_to("/nowhere")


class TestAsyncBoundary:
    @pytest.mark.anyio
    async def test_async_context(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        async with RedirectBoundary(history):
            await anyio.sleep(0)
            redirect_to("/login")

        assert store.navigations == [("REPLACE", "/login")]

    @pytest.mark.anyio
    async def test_redirect_from_child_task(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        async def child() -> None:
            redirect_to("/from-task")

        async with RedirectBoundary(history), anyio.create_task_group() as tg:
            tg.start_soon(child)

        assert store.navigations == [("REPLACE", "/from-task")]

    @pytest.mark.anyio
    async def test_group_with_other_errors_reraises_rest(
        self, store: MemoryLocationStore, history: HistoryCoordinator
    ) -> None:
        with pytest.raises(BaseExceptionGroup) as exc_info:
            async with RedirectBoundary(history):
                raise BaseExceptionGroup("mixed", [RedirectRequest("/login"), KeyError("broken")])

        assert exc_info.group_contains(KeyError)
        assert not exc_info.group_contains(RedirectRequest)
        assert store.navigations == [("REPLACE", "/login")]

    @pytest.mark.anyio
    async def test_async_other_error_passes_through(self, history: HistoryCoordinator) -> None:
        with pytest.raises(RuntimeError, match="nope"):
            async with RedirectBoundary(history):
                raise RuntimeError("nope")
