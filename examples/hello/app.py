"""Hello: the smallest peep script.

Run with::

    peep run examples/hello/app.py
"""

from peep import less

less.activate(port=8000)


def index():
    return "Hello, World!"


def whoami():
    return {"method": req().method, "agent": req().headers.get("user-agent")}


attr("greeting", lambda: "Hello")

get("/", index)
get("/person/:name", lambda: f"{app().greeting} {named('name')}")
route("/whoami", "whoami")
post("/echo", lambda: {"said": param("text")})
get("/forbidden", lambda: res().set_status(403).json().render({"message": "Forbidden"}))

application = run()
