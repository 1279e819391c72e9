# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""The four generation operations invoked by the build.

Each takes a loaded PipelineContext and returns the text the build expects
on stdout.
"""

import logging
from pathlib import Path
from typing import AbstractSet, Optional, Sequence, Union

from volk_gen._internal.io import read_text, write_text
from volk_gen.context import PipelineContext
from volk_gen.errors import UnknownMachineError
from volk_gen.template import TemplateEngine
from volk_gen.template.engine import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


def arch_flags(context: PipelineContext, compiler: str) -> str:
    """``name,flag,flag;name,...`` for every arch the compiler supports."""
    compiler = compiler.lower()
    entries = []
    for arch in context.archs:
        if arch.is_supported(compiler):
            entries.append(",".join([arch.name] + arch.get_flags(compiler)))
    return ";".join(entries)


def available_machines(context: PipelineContext, archs: AbstractSet[str]) -> str:
    """Names of the machines buildable from ``archs``, ``;``-joined."""
    names = [m.name for m in context.machines if set(m.arch_names) <= archs]
    return ";".join(names)


def machine_flags(context: PipelineContext, machine: str, compiler: str) -> str:
    """All compiler flags of the machine's archs, space-joined.

    Raises:
        UnknownMachineError: If no machine is named ``machine``
    """
    found = context.machines.get(machine)
    if found is None:
        raise UnknownMachineError(machine)

    compiler = compiler.lower()
    flags = []
    for arch in found.archs:
        flags.extend(arch.get_flags(compiler))
    return " ".join(flags)


def render_template(
    context: PipelineContext,
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    args: Sequence[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render the template at ``input_path``.

    The result is written to ``output_path`` when given and returned in
    either case.

    Raises:
        SourceFileError: If the template cannot be read
        OutputFileError: If the output cannot be written
    """
    template = read_text(input_path)
    engine = TemplateEngine(context, max_depth=max_depth)
    result = engine.render(template, args)

    if output_path is not None:
        written = write_text(output_path, result)
        logger.info(f"Wrote {written}")
    return result
