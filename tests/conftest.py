# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared fixtures: a miniature VOLK source tree written to tmp_path."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from volk_gen.catalog import ArchCatalog, MachineCatalog
from volk_gen.context import PipelineContext
from volk_gen.kernels import KernelCatalog


ARCHS_XML = """\
<!-- architecture descriptions used by the tests -->
<grammar>
<arch name="generic"/>

<arch name="sse">
  <flag compiler="gnu">-msse</flag>
  <flag compiler="clang">-msse</flag>
  <environment>_MM_SET_FLUSH_ZERO_MODE(_MM_FLUSH_ZERO_ON);</environment>
  <include>xmmintrin.h</include>
  <alignment>16</alignment>
  <check name="cpuid_x86_bit">
    <param>3</param>
    <param>0x00000001</param>
    <param>25</param>
  </check>
</arch>

<arch name="sse2">
  <flag compiler="gnu">-msse2</flag>
  <alignment>16</alignment>
  <check name="cpuid_x86_bit"><param>3</param><param>0x00000001</param><param>26</param></check>
</arch>

<arch name="avx">
  <flag compiler="gnu">-mavx</flag>
  <flag compiler="msvc">/arch:AVX</flag>
  <alignment>32</alignment>
  <check name="cpuid_x86_bit"><param>2</param><param>0x00000001</param><param>28</param></check>
  <check name="get_avx_enabled"></check>
</arch>

<arch name="neon">
  <flag compiler="gnu">-mfpu=neon</flag>
  <flag compiler="gnu">-mfloat-abi=softfp</flag>
  <alignment>16</alignment>
</arch>
</grammar>
"""

MACHINES_XML = """\
<grammar>
<machine name="generic">
  <archs>generic orc|</archs>
</machine>

<machine name="sse2">
  <archs>generic sse sse2</archs>
</machine>

<machine name="avx">
  <archs>generic sse sse2 avx</archs>
</machine>

<!-- references an arch that does not exist -->
<machine name="bogus">
  <archs>generic nonexistent</archs>
</machine>

<machine name="neon">
  <archs>generic neon</archs>
</machine>
</grammar>
"""

ADD_KERNEL = """\
#ifndef INCLUDED_volk_32f_add_32f_u_H
#define INCLUDED_volk_32f_add_32f_u_H

#include <inttypes.h>

#ifdef LV_HAVE_GENERIC

static inline void volk_32f_add_32f_generic(float* cVector,
                                            const float* aVector,
                                            const float* bVector,
                                            unsigned int num_points)
{
    // a { in a comment must not end the signature
    for (unsigned int i = 0; i < num_points; i++) {
        cVector[i] = aVector[i] + bVector[i];
    }
}
#endif /* LV_HAVE_GENERIC */

#ifdef LV_HAVE_SSE
#include <xmmintrin.h>

static inline void volk_32f_add_32f_a_sse(float* cVector,
                                          const float* aVector,
                                          const float* bVector,
                                          unsigned int num_points)
{
}
#endif /* LV_HAVE_SSE */

#if LV_HAVE_AVX && LV_HAVE_SSE2
static inline void volk_32f_add_32f_u_avx(float* cVector,
                                          const float* aVector,
                                          const float* bVector,
                                          unsigned int num_points)
{
}
#endif

#endif /* INCLUDED_volk_32f_add_32f_u_H */
"""

MAX_STAR_KERNEL = """\
#ifndef INCLUDED_volk_16i_max_star_16i_a_H
#define INCLUDED_volk_16i_max_star_16i_a_H

#ifdef LV_HAVE_GENERIC
static inline void volk_16i_max_star_16i_generic(short* target, short* src0, unsigned int num_points)
{
}
#endif

#ifdef LV_HAVE_DISPATCHER
static inline void volk_16i_max_star_16i_dispatcher(short* target, short* src0, unsigned int num_points)
{
}
#endif

#endif
"""

NO_GENERIC_KERNEL = """\
#ifndef INCLUDED_volk_32f_nogeneric_32f_H
#define INCLUDED_volk_32f_nogeneric_32f_H

#ifdef LV_HAVE_SSE
static inline void volk_32f_nogeneric_32f_a_sse(float* out, const float* in, unsigned int num_points)
{
}
#endif

#endif
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset the root logger between tests; the CLI installs handlers on it."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's VOLK_* settings and project files out of tests."""
    for var in ("VOLK_SOURCE_DIR", "VOLK_LOG_LEVEL", "VOLK_LOGGING__LEVEL", "VOLK_CHECK_SIGNATURES"):
        monkeypatch.delenv(var, raising=False)
    project_dir = tmp_path / "no_project"
    project_dir.mkdir()
    monkeypatch.setenv("VOLK_PROJECT_DIR", str(project_dir))


@pytest.fixture
def source_tree(tmp_path) -> Path:
    """A VOLK checkout with gen/archs.xml, gen/machines.xml and three kernel headers."""
    root = tmp_path / "volk"
    (root / "gen").mkdir(parents=True)
    (root / "gen" / "archs.xml").write_text(ARCHS_XML)
    (root / "gen" / "machines.xml").write_text(MACHINES_XML)

    kernels = root / "kernels" / "volk"
    kernels.mkdir(parents=True)
    (kernels / "volk_32f_add_32f.h").write_text(ADD_KERNEL)
    (kernels / "volk_16i_max_star_16i.h").write_text(MAX_STAR_KERNEL)
    (kernels / "volk_32f_nogeneric_32f.h").write_text(NO_GENERIC_KERNEL)
    (kernels / "README.txt").write_text("not a kernel header\n")
    return root


@pytest.fixture
def archs() -> ArchCatalog:
    return ArchCatalog.from_text(ARCHS_XML)


@pytest.fixture
def machines(archs) -> MachineCatalog:
    return MachineCatalog.from_text(MACHINES_XML, archs)


@pytest.fixture
def pipeline(source_tree, archs, machines) -> PipelineContext:
    kernels = KernelCatalog.from_directory(source_tree / "kernels" / "volk")
    return PipelineContext(archs=archs, machines=machines, kernels=kernels)
