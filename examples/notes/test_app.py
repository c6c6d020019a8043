"""Tests for the notes example."""

from peep.testing import TestClient


class TestNotesApp:
    async def test_empty_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "<h1>Notes</h1>" in response.text
            assert "<li>" not in response.text

    async def test_add_then_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/", form={"text": "buy milk"})
            assert response.status == 302
            assert response.header("location") == "/"

            response = await client.get("/")
            assert "<li>buy milk</li>" in response.text

    async def test_show_note(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/", form={"text": "first"})
            response = await client.get("/notes/0")
            assert response.text == "<p>#0: first</p>"

    async def test_missing_note(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/notes/3")
            assert response.status == 404
            assert response.text == "No such note"

    async def test_empty_note_rejected(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/", form={"text": ""})
            assert response.status == 400
            assert response.text == "text is required"
