"""Script loading: executes a peep script and finds its application.

Shared by ``peep run`` and ``peep routes``.
"""

import importlib.util
import sys
from pathlib import Path

from peep import less
from peep.app import App


def load_script(path: str) -> App:
    """Execute the script at *path* and return the application it built.

    The script runs as a regular module (named after the file) so that
    string route destinations keep resolving against its namespace.
    The application is the one ``activate()`` created, or else a module
    attribute named ``application`` or ``app`` holding an ``App``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        TypeError: If the script does not produce an ``App``.
    """
    script = Path(path)
    if not script.is_file():
        msg = f"No such script: {path}"
        raise FileNotFoundError(msg)

    module_name = f"peep_script_{script.stem}"
    spec = importlib.util.spec_from_file_location(module_name, script)
    if spec is None or spec.loader is None:
        msg = f"Cannot load {path!r} as a Python module"
        raise TypeError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)

    if less._holder.initialized:
        return less.current()

    for attr_name in ("application", "app"):
        obj = getattr(module, attr_name, None)
        if isinstance(obj, App):
            return obj

    msg = f"{path!r} did not call activate() and defines no App named 'application' or 'app'"
    raise TypeError(msg)
