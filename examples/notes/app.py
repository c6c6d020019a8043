"""Notes: templates, the stash, and lazy attributes.

A tiny in-memory notebook. Run with::

    peep run examples/notes/app.py
"""

from pathlib import Path

from peep import less

less.activate(template_dir=Path(__file__).parent / "templates", site_name="Notes")


def _store(app):
    debug("Creating note store for %s", app.config.options["site_name"])
    return []


attr("notes", _store)


def list_notes():
    stash("title", app().config.options["site_name"])
    return template("list", {"title": stash("title"), "notes": app().notes})


def add_note():
    text = param("text")
    if not text:
        error("Rejected empty note")
        return res().set_status(400).text().render("text is required")
    app().notes.append(text)
    return res().redirect("/")


def show_note(index: int):
    notes = app().notes
    if not 0 <= index < len(notes):
        return "No such note", 404
    return template("note", {"index": index, "text": notes[index]})


get("/", list_notes)
post("/", add_note)
get("/notes/:index", show_note)

application = run()
