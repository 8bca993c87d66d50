import os
import shutil

import pytest

from iqra.consts import SHELL_FALLBACK_ENV
from iqra.system import DefaultSystemExecutor, SystemExecutor


@pytest.fixture
def default_executor(monkeypatch):
    monkeypatch.delenv(SHELL_FALLBACK_ENV, raising=False)
    return DefaultSystemExecutor()


def test_interface_is_abstract():
    with pytest.raises(TypeError):
        SystemExecutor()


def test_file_round_trip(default_executor, tmp_path):
    path = tmp_path / "نص.txt"
    assert default_executor.write_file(str(path), "مرحبا\nworld") is True
    assert default_executor.read_file(str(path)) == "مرحبا\nworld"


def test_list_files_is_sorted(default_executor, tmp_path):
    for name in ("b.txt", "a.txt", "c"):
        (tmp_path / name).write_text("", encoding="utf-8")
    assert default_executor.list_files(str(tmp_path)) == ["a.txt", "b.txt", "c"]


def test_missing_paths_raise_os_errors(default_executor, tmp_path):
    with pytest.raises(OSError):
        default_executor.read_file(str(tmp_path / "missing"))
    with pytest.raises(OSError):
        default_executor.list_files(str(tmp_path / "missing"))


def test_env_var(default_executor, monkeypatch):
    monkeypatch.setenv("IQRA_TEST_VALUE", "قيمة")
    monkeypatch.delenv("IQRA_TEST_MISSING", raising=False)
    assert default_executor.get_env_var("IQRA_TEST_VALUE") == "قيمة"
    assert default_executor.get_env_var("IQRA_TEST_MISSING") is None


def test_shell_fallback_follows_environment(monkeypatch):
    executor = DefaultSystemExecutor()
    monkeypatch.delenv(SHELL_FALLBACK_ENV, raising=False)
    assert not executor.shell_allowed()
    monkeypatch.setenv(SHELL_FALLBACK_ENV, "1")
    assert executor.shell_allowed()


def test_explicit_shell_flag_wins(monkeypatch):
    monkeypatch.setenv(SHELL_FALLBACK_ENV, "1")
    assert DefaultSystemExecutor(allow_shell_fallback=False).shell_allowed() is False
    monkeypatch.delenv(SHELL_FALLBACK_ENV)
    assert DefaultSystemExecutor(allow_shell_fallback=True).shell_allowed() is True


def test_commands_are_split_on_whitespace(default_executor):
    assert default_executor.build_command("echo  a\tb") == (["echo", "a", "b"], False)
    assert default_executor.build_command("echo it's") == (["echo", "it's"], False)
    assert default_executor.build_command('echo "a b"') == (["echo", '"a', 'b"'], False)
    with pytest.raises(OSError):
        default_executor.build_command("   ")


def test_shell_fallback_passes_command_through():
    executor = DefaultSystemExecutor(allow_shell_fallback=True)
    assert executor.build_command("echo a | wc -l") == ("echo a | wc -l", True)


def test_unknown_program_raises(default_executor):
    with pytest.raises(OSError):
        default_executor.exec("iqra-no-such-program-xyz")


@pytest.mark.skipif(shutil.which("echo") is None, reason="needs an echo program")
def test_exec_returns_stdout(default_executor):
    assert default_executor.exec("echo hi").strip() == "hi"


@pytest.mark.skipif(shutil.which("cat") is None, reason="needs a cat program")
def test_exec_with_io_feeds_stdin(default_executor):
    assert default_executor.exec_with_io("cat", "نص") == "نص"


def test_system_info_has_string_values(default_executor):
    info = default_executor.system_info()
    assert "os" in info
    assert all(isinstance(v, str) and v for v in info.values())
    assert set(info) <= {"os", "os_version", "hostname", "arch", "cpu_cores"}
    if os.cpu_count():
        assert info["cpu_cores"] == str(os.cpu_count())
