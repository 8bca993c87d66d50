import pytest

from iqra.errors import IqraError
from iqra.interp import Runtime
from iqra.system import SystemExecutor


class MockSystemExecutor(SystemExecutor):
    """Canned answers; records every call in ``calls``."""

    def __init__(self):
        self.calls = []

    def exec(self, cmd):
        self.calls.append(("exec", cmd))
        return "mocked output\n"

    def exec_with_io(self, cmd, input_text):
        self.calls.append(("exec_with_io", cmd, input_text))
        return "  mocked output with input  "

    def read_file(self, path):
        self.calls.append(("read_file", path))
        return "mocked file content"

    def write_file(self, path, content):
        self.calls.append(("write_file", path, content))
        return True

    def list_files(self, path):
        self.calls.append(("list_files", path))
        return ["file1.txt", "file2.txt"]

    def get_env_var(self, name):
        self.calls.append(("get_env_var", name))
        if name == "MISSING":
            return None
        return "mocked env value"

    def system_info(self):
        self.calls.append(("system_info",))
        return {"os": "Linux", "arch": "x86_64"}


class FailingSystemExecutor(MockSystemExecutor):
    def exec(self, cmd):
        raise FileNotFoundError(2, "No such file or directory", cmd)

    def exec_with_io(self, cmd, input_text):
        raise OSError("broken pipe")

    def read_file(self, path):
        raise FileNotFoundError(2, "No such file or directory", path)

    def write_file(self, path, content):
        raise PermissionError(13, "Permission denied", path)

    def list_files(self, path):
        raise NotADirectoryError(20, "Not a directory", path)

    def system_info(self):
        raise OSError("unavailable")


@pytest.fixture
def executor():
    return MockSystemExecutor()


@pytest.fixture
def runtime(executor):
    return Runtime(system_executor=executor)


@pytest.fixture
def failing_runtime():
    return Runtime(system_executor=FailingSystemExecutor())


@pytest.fixture
def run_error(runtime):
    """Executes source expecting failure and returns the raised error."""

    def _run_error(text, target=None):
        with pytest.raises(IqraError) as info:
            (target or runtime).execute(text)
        return info.value

    return _run_error
