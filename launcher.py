import logging
import os
import shlex
import subprocess

from desktop_entry import SemanticError
from exec_template import expand

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL = "xterm -e"


def terminal_command(environ=None):
    if environ is None:
        environ = os.environ
    return (environ.get("TERMINAL") or DEFAULT_TERMINAL).split()


def build_argv(entry, args, environ=None):
    command = expand(entry, args)
    try:
        argv = shlex.split(command)
    except ValueError as exc:
        raise SemanticError(f"cannot split command {command!r}: {exc}") from exc
    if entry.data.get("Terminal") == "true":
        argv = terminal_command(environ) + argv
    return argv


def determine_launch(entry, args, replace=False, environ=None):
    argv = build_argv(entry, args, environ)
    if replace:
        return "exec", argv
    return "run", argv


def launch(entry, args, replace=False):
    """Run *entry* on *args*.

    Blocks and returns the exit status, or with *replace* swaps the
    current process for the application and does not return.
    """
    method, argv = determine_launch(entry, args, replace)
    logger.info("Launching %s", shlex.join(argv))
    if method == "exec":
        os.execvp(argv[0], argv)
        return None
    return subprocess.call(argv)
