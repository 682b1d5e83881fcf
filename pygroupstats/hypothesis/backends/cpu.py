"""
CPU backend for two-group and one-sample tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from pygroupstats.core.compute.timing import Timer
from pygroupstats.core.result import Result
from pygroupstats.hypothesis._common import HTestParams
from pygroupstats.hypothesis.design import HypothesisDesign


class CPUHypothesisBackend:
    """CPU backend for hypothesis tests."""

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    def solve(self, design: HypothesisDesign) -> Result[HTestParams]:
        """Dispatch to the implementation for design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "t_two_sample":
                from pygroupstats.hypothesis.backends._t_test import t_two_sample
                params, warnings_list = t_two_sample(design)
            elif test_type == "permutation_two_sample":
                from pygroupstats.hypothesis.backends._perm_test import permutation_two_sample
                params, warnings_list = permutation_two_sample(design)
            elif test_type == "yuen":
                from pygroupstats.hypothesis.backends._yuen_test import yuen
                params, warnings_list = yuen(design)
            elif test_type == "yuen_bootstrap":
                from pygroupstats.hypothesis.backends._yuen_test import yuen_bootstrap
                params, warnings_list = yuen_bootstrap(design)
            elif test_type == "lillie":
                from pygroupstats.hypothesis.backends._ks_test import lillie
                params, warnings_list = lillie(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        return Result(
            params=params,
            info={'test_type': test_type, 'levels': design.levels},
            timing=timer.result(),
            backend_name=self.name,
            warnings=design.warnings + tuple(warnings_list),
        )
