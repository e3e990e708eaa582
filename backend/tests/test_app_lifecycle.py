"""
Todo REST Backend — Application Lifecycle Tests
=================================================

What we test:
    ✅ Startup loads the data file when persistence is on
    ✅ A malformed data file aborts startup
    ✅ The command-line entry point wires flags into the store and uvicorn
"""

import pytest
from unittest.mock import patch

from todo_api.exceptions import PersistenceError
from todo_api.main import create_app
from todo_api.services.todo_store import TodoStore


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_loads_data_file(self, persistent_store, data_file):
        data_file.write_text("0,from disk,,true\n", encoding="utf-8")
        app = create_app(store=persistent_store)

        async with app.router.lifespan_context(app):
            assert persistent_store.get("0").title == "from disk"

    @pytest.mark.asyncio
    async def test_startup_without_persistence_ignores_file(self, data_file):
        data_file.write_text("0,from disk,,true\n", encoding="utf-8")
        store = TodoStore(data_file=str(data_file), file_persistence=False)
        app = create_app(store=store)

        async with app.router.lifespan_context(app):
            assert len(store) == 0

    @pytest.mark.asyncio
    async def test_malformed_data_file_aborts_startup(self, persistent_store, data_file):
        data_file.write_text("garbage\n", encoding="utf-8")
        app = create_app(store=persistent_store)

        with pytest.raises(PersistenceError):
            async with app.router.lifespan_context(app):
                pass


class TestEntryPoint:

    def test_persist_flag(self, tmp_path):
        from todo_api.__main__ import main

        data_file = str(tmp_path / "todos.csv")
        with patch("todo_api.__main__.uvicorn.run") as mock_run:
            main(["--persist", "--data-file", data_file, "--port", "9000"])

        app = mock_run.call_args.args[0]
        store = app.state.todo_service.store
        assert store.file_persistence is True
        assert str(store.data_file) == data_file
        assert mock_run.call_args.kwargs["port"] == 9000

    def test_defaults_to_memory_only(self):
        from todo_api.__main__ import main

        with patch("todo_api.__main__.uvicorn.run") as mock_run:
            main([])

        app = mock_run.call_args.args[0]
        assert app.state.todo_service.store.file_persistence is False
        assert mock_run.call_args.kwargs["port"] == 8080
