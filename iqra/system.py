import logging
import os
import platform
import subprocess
from abc import ABC, abstractmethod

from .consts import SHELL_FALLBACK_ENV

logger = logging.getLogger(__name__)


class SystemExecutor(ABC):
    """Everything the builtins need from the host operating system.

    Implementations raise ``OSError`` on failure; the interpreter wraps
    those into Iqra errors.
    """

    @abstractmethod
    def exec(self, cmd):
        """Run ``cmd`` and return its standard output."""

    @abstractmethod
    def exec_with_io(self, cmd, input_text):
        """Run ``cmd`` with ``input_text`` on standard input."""

    @abstractmethod
    def read_file(self, path):
        pass

    @abstractmethod
    def write_file(self, path, content):
        """Write ``content`` to ``path``, returning True on success."""

    @abstractmethod
    def list_files(self, path):
        """Return the sorted entry names of directory ``path``."""

    @abstractmethod
    def get_env_var(self, name):
        """Return the variable's value, or None when it is not set."""

    @abstractmethod
    def system_info(self):
        """Return a dict of string keys to string values."""


class DefaultSystemExecutor(SystemExecutor):
    __slots__ = ("allow_shell_fallback",)

    def __init__(self, allow_shell_fallback=None):
        # None defers to the environment on every call
        self.allow_shell_fallback = allow_shell_fallback

    def shell_allowed(self):
        if self.allow_shell_fallback is None:
            return SHELL_FALLBACK_ENV in os.environ
        return self.allow_shell_fallback

    def build_command(self, cmd):
        if self.shell_allowed():
            return cmd, True

        # plain whitespace split, no quoting rules
        argv = cmd.split()
        if not argv:
            raise OSError("Empty command")
        return argv, False

    def run(self, cmd, input_text=None):
        args, shell = self.build_command(cmd)
        logger.debug("running %r (shell=%s)", cmd, shell)
        result = subprocess.run(
            args,
            shell=shell,
            input=None if input_text is None else input_text.encode("utf-8"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        logger.debug("%r exited with %d", cmd, result.returncode)
        return result.stdout.decode("utf-8", errors="replace")

    def exec(self, cmd):
        return self.run(cmd)

    def exec_with_io(self, cmd, input_text):
        return self.run(cmd, input_text)

    def read_file(self, path):
        logger.debug("reading %s", path)
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_file(self, path, content):
        logger.debug("writing %d characters to %s", len(content), path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return True

    def list_files(self, path):
        return sorted(os.listdir(path))

    def get_env_var(self, name):
        return os.environ.get(name)

    def system_info(self):
        info = {
            "os": platform.system() or os.name,
            "os_version": platform.release(),
            "hostname": platform.node(),
            "arch": platform.machine(),
        }
        cpu_count = os.cpu_count()
        if cpu_count:
            info["cpu_cores"] = str(cpu_count)
        return {k: v for k, v in info.items() if v}
