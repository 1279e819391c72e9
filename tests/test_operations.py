# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the generation operations and catalog loading."""

import pytest

from volk_gen import PipelineContext, load_config, operations
from volk_gen.errors import OutputFileError, SourceFileError, UnknownMachineError
from volk_gen.template import BANNER


def test_arch_flags_lowercases_compiler(pipeline):
    assert operations.arch_flags(pipeline, "MSVC") == "generic;avx,/arch:AVX"


def test_available_machines(pipeline):
    assert operations.available_machines(pipeline, {"generic"}) == "generic"
    assert operations.available_machines(pipeline, {"generic", "neon", "sse"}) == "generic;neon"
    assert operations.available_machines(pipeline, set()) == ""


def test_machine_flags(pipeline):
    assert operations.machine_flags(pipeline, "neon", "GNU") == "-mfpu=neon -mfloat-abi=softfp"
    assert operations.machine_flags(pipeline, "generic", "gnu") == ""


def test_machine_flags_unknown(pipeline):
    with pytest.raises(UnknownMachineError) as exc:
        operations.machine_flags(pipeline, "sse9", "gnu")
    assert exc.value.name == "sse9"


def test_render_template_writes_output(pipeline, tmp_path):
    template = tmp_path / "t.tmpl"
    template.write_text("// archs\n%for arch in archs:\n${arch.name}\n%endfor\n")
    output = tmp_path / "gen" / "t.c"
    result = operations.render_template(pipeline, template, output)
    assert result == BANNER + "// archs\ngeneric\nsse\nsse2\navx\nneon\n"
    assert output.read_text() == result


def test_render_template_unwritable_output(pipeline, tmp_path):
    template = tmp_path / "t.tmpl"
    template.write_text("x\n")
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(OutputFileError):
        operations.render_template(pipeline, template, blocker / "t.c")


def test_render_template_missing_input(pipeline, tmp_path):
    with pytest.raises(SourceFileError):
        operations.render_template(pipeline, tmp_path / "missing.tmpl")


def test_context_from_config(source_tree):
    context = PipelineContext.from_config(load_config(source_dir=source_tree))
    assert len(context.archs) == 5
    assert len(context.machines) == 4
    assert [k.name for k in context.kernels] == ["volk_16i_max_star_16i", "volk_32f_add_32f"]


def test_context_without_kernels(source_tree):
    context = PipelineContext.from_config(load_config(source_dir=source_tree), load_kernels=False)
    assert len(context.kernels) == 0


def test_context_missing_kernel_dir(source_tree):
    config = load_config(source_dir=source_tree, kernels_dir=source_tree / "nowhere")
    with pytest.raises(SourceFileError, match="nowhere"):
        PipelineContext.from_config(config)
    assert len(PipelineContext.from_config(config, load_kernels=False).archs) == 5


def test_context_missing_archs(tmp_path):
    with pytest.raises(SourceFileError, match="archs.xml"):
        PipelineContext.from_config(load_config(source_dir=tmp_path))
