# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the volk-gen command line."""

import shutil
import sys

import pytest
from click.testing import CliRunner

from volk_gen.cli import create_cli, main
from volk_gen.cli.constants import ExitCode
from volk_gen.cli.exceptions import DataError, InputFileError
from volk_gen.template import BANNER


@pytest.fixture
def invoke(source_tree):
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(create_cli(), ["--source-dir", str(source_tree), *args])

    return _invoke


def test_help_lists_commands():
    result = CliRunner().invoke(create_cli(), ["--help"])
    assert result.exit_code == 0
    for name in ("arch_flags", "machines", "machine_flags", "render", "info"):
        assert name in result.output


def test_arch_flags(invoke):
    result = invoke("arch_flags", "--compiler", "GNU")
    assert result.exit_code == 0
    assert result.stdout == (
        "generic;sse,-msse;sse2,-msse2;avx,-mavx;neon,-mfpu=neon,-mfloat-abi=softfp\n"
    )


def test_arch_flags_other_compiler(invoke):
    assert invoke("arch_flags", "--compiler", "clang").stdout == "generic;sse,-msse\n"


def test_machines(invoke):
    result = invoke("machines", "--archs", "generic;sse;sse2")
    assert result.exit_code == 0
    assert result.stdout == "generic;sse2\n"


def test_machine_flags(invoke):
    result = invoke("machine_flags", "--machine", "avx", "--compiler", "gnu")
    assert result.exit_code == 0
    assert result.stdout == "-msse -msse2 -mavx\n"


def test_machine_flags_unknown_machine(invoke):
    result = invoke("machine_flags", "--machine", "sse9", "--compiler", "gnu")
    assert isinstance(result.exception, DataError)
    assert result.exception.exit_code == ExitCode.DATAERR
    assert "Unknown machine: sse9" in str(result.exception)


def test_render_to_stdout(invoke, tmp_path):
    template = tmp_path / "names.tmpl.h"
    template.write_text("%for kern in kernels:\n${kern.name}\n%endfor\n")
    result = invoke("render", "--input", str(template))
    assert result.exit_code == 0
    assert result.stdout == BANNER + "volk_16i_max_star_16i\nvolk_32f_add_32f\n"


def test_render_to_file_with_machine(invoke, tmp_path):
    template = tmp_path / "machine.tmpl.c"
    template.write_text("<% this_machine = machine_dict[args[0]] %>\nalign=${this_machine.alignment}\n")
    output = tmp_path / "out" / "volk_machine_avx.c"
    result = invoke("render", "--input", str(template), "--output", str(output), "avx")
    assert result.exit_code == 0
    assert result.stdout == ""
    assert output.read_text() == BANNER + "\nalign=32\n"


def test_render_missing_template(invoke, tmp_path):
    result = invoke("render", "--input", str(tmp_path / "missing.tmpl"))
    assert isinstance(result.exception, InputFileError)
    assert result.exception.exit_code == ExitCode.NOINPUT


def test_render_without_kernel_dir(invoke, source_tree, tmp_path):
    shutil.rmtree(source_tree / "kernels")
    template = tmp_path / "names.tmpl.h"
    template.write_text("%for kern in kernels:\n${kern.name}\n%endfor\n")
    result = invoke("render", "--input", str(template))
    assert isinstance(result.exception, InputFileError)
    assert result.exception.exit_code == ExitCode.NOINPUT
    assert result.stdout == ""


def test_flags_without_kernel_dir(invoke, source_tree):
    shutil.rmtree(source_tree / "kernels")
    result = invoke("arch_flags", "--compiler", "msvc")
    assert result.exit_code == 0
    assert result.stdout == "generic;avx,/arch:AVX\n"


def test_missing_description_files(tmp_path):
    result = CliRunner().invoke(create_cli(), ["--source-dir", str(tmp_path), "arch_flags", "--compiler", "gnu"])
    assert isinstance(result.exception, InputFileError)


def test_info(invoke):
    result = invoke("info")
    assert result.exit_code == 0
    assert "volk_32f_add_32f" in result.stdout
    assert "Machines" in result.stdout


@pytest.mark.parametrize("level", ["error", "warning", "info", "debug"])
def test_log_level_option(source_tree, level):
    result = CliRunner().invoke(
        create_cli(), ["--log-level", level, "--source-dir", str(source_tree), "machines", "--archs", "generic"]
    )
    assert result.exit_code == 0
    assert result.stdout == "generic\n"


def test_main_exit_codes(source_tree, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", [
        "volk-gen", "--source-dir", str(source_tree), "machine_flags", "--machine", "nope", "--compiler", "gnu",
    ])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == ExitCode.DATAERR
    assert "Unknown machine: nope" in capsys.readouterr().err

    monkeypatch.setattr(sys, "argv", ["volk-gen", "--source-dir", str(source_tree), "machines", "--archs", "generic"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 0
    assert capsys.readouterr().out == "generic\n"


def test_main_unexpected_error(source_tree, monkeypatch, capsys):
    from volk_gen import operations

    def broken(context, compiler):
        raise RuntimeError("boom")

    monkeypatch.setattr(operations, "arch_flags", broken)
    monkeypatch.setattr(sys, "argv", ["volk-gen", "--source-dir", str(source_tree), "arch_flags", "--compiler", "gnu"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == ExitCode.SOFTWARE
    captured = capsys.readouterr()
    assert "Unexpected error" in captured.err
    assert captured.out == ""
