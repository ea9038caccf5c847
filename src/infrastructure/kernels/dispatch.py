"""Runtime selection of the reduction kernel.

The widest lane kernel the CPU supports is chosen by default: ``f32x8``
needs AVX, ``f32x4`` needs SSE or NEON/ASIMD. The scalar and unrolled
kernels are always available. Every kernel produces the same result
within tolerance, so the choice only affects speed.
"""
import functools
import logging

import cpuinfo

from src.domain.interfaces.reduction_kernel import ReductionKernel
from src.infrastructure.kernels.lanes import LaneKernel
from src.infrastructure.kernels.scalar import ScalarKernel
from src.infrastructure.kernels.unrolled import UnrolledKernel

logger = logging.getLogger(__name__)

AUTO = "auto"
KERNEL_NAMES = ("scalar", "unrolled", "f32x4", "f32x8")

_F32X4_FLAGS = frozenset({"sse", "sse2", "neon", "asimd"})
_F32X8_FLAGS = frozenset({"avx"})


@functools.lru_cache(maxsize=1)
def detect_cpu_flags() -> frozenset[str]:
    """
    Query the instruction-set flags of the running CPU.

    Returns
    -------
    frozenset[str]
        Lower-cased feature flags as reported by py-cpuinfo.
    """
    info = cpuinfo.get_cpu_info()
    flags = frozenset(flag.lower() for flag in info.get("flags", []))
    logger.debug(f"Detected {len(flags)} CPU flags on {info.get('arch', 'unknown')}")
    return flags


def available_kernels(flags: frozenset[str] | None = None) -> list[str]:
    """
    List the kernels usable on a CPU, narrowest first.

    Parameters
    ----------
    flags : frozenset[str] | None
        CPU feature flags; detected from the running CPU when None.

    Returns
    -------
    list[str]
        Kernel names, always starting with ``"scalar"`` and ``"unrolled"``.
    """
    if flags is None:
        flags = detect_cpu_flags()

    names = ["scalar", "unrolled"]
    if flags & _F32X4_FLAGS:
        names.append("f32x4")
    if flags & _F32X8_FLAGS:
        names.append("f32x8")
    return names


def create_kernel(name: str) -> ReductionKernel:
    """
    Instantiate a kernel by name, without checking CPU support.

    Raises
    ------
    ValueError
        If the name is not one of ``KERNEL_NAMES``.
    """
    if name == "scalar":
        return ScalarKernel()
    if name == "unrolled":
        return UnrolledKernel()
    if name == "f32x4":
        return LaneKernel(4)
    if name == "f32x8":
        return LaneKernel(8)
    raise ValueError(f"Unknown kernel {name!r}. Available: {list(KERNEL_NAMES)}")


def select_kernel(
    preferred: str = AUTO,
    flags: frozenset[str] | None = None,
) -> ReductionKernel:
    """
    Resolve a kernel preference against the CPU capabilities.

    Parameters
    ----------
    preferred : str
        ``"auto"`` for the widest available kernel, or one of ``KERNEL_NAMES``.
    flags : frozenset[str] | None
        CPU feature flags; detected from the running CPU when None.

    Returns
    -------
    ReductionKernel
        The selected kernel.

    Raises
    ------
    ValueError
        If the kernel is unknown or not supported by the CPU.
    """
    available = available_kernels(flags)

    if preferred == AUTO:
        name = available[-1]
    elif preferred not in KERNEL_NAMES:
        raise ValueError(f"Unknown kernel {preferred!r}. Available: {available}")
    elif preferred not in available:
        raise ValueError(
            f"Kernel {preferred!r} is not supported on this CPU. Available: {available}"
        )
    else:
        name = preferred

    logger.info(f"Using {name} reduction kernel")
    return create_kernel(name)


@functools.lru_cache(maxsize=1)
def get_default_kernel() -> ReductionKernel:
    """Return the automatically selected kernel, selected once per process."""
    return select_kernel(AUTO)
