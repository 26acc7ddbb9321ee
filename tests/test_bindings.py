"""
Tests for BindingTracker.
"""

from nbstate.bindings import NOISY_NAMES, BindingTracker, is_noisy
from nbstate.kernel import NotebookKernel


class TestIsNoisy:
    """Tests for is_noisy()."""

    def test_fixed_names(self):
        for name in ("_", "__", "___", "_i", "In", "Out", "get_ipython"):
            assert is_noisy(name)

    def test_numbered_caches(self):
        assert is_noisy("_1")
        assert is_noisy("_i12")

    def test_user_names(self):
        assert not is_noisy("x")
        assert not is_noisy("_private")
        assert not is_noisy("i1")


class TestBindingTracker:
    """Tests for user_defined_variables()."""

    def setup_method(self):
        self.kernel = NotebookKernel()

    def test_preexisting_names_are_baseline(self):
        self.kernel.execute("before = 1")
        tracker = BindingTracker(self.kernel)
        assert "before" in tracker.baseline
        assert tracker.user_defined_variables() == {}

    def test_new_names_reported_with_values(self):
        tracker = BindingTracker(self.kernel)
        self.kernel.execute("x = 3\ny = [1, 2]")
        assert tracker.user_defined_variables() == {"x": 3, "y": [1, 2]}

    def test_output_caches_excluded(self):
        """Displayed results populate _, _N and friends; none are reported."""
        tracker = BindingTracker(self.kernel)
        self.kernel.execute("value = 10")
        self.kernel.execute("value * 2")
        self.kernel.execute("value * 3")
        assert tracker.user_defined_variables() == {"value": 10}

    def test_removed_names_disappear(self):
        tracker = BindingTracker(self.kernel)
        self.kernel.execute("temp = 1")
        assert "temp" in tracker.user_defined_variables()
        self.kernel.execute("del temp")
        assert "temp" not in tracker.user_defined_variables()

    def test_values_track_rebinding(self):
        tracker = BindingTracker(self.kernel)
        self.kernel.execute("v = 1")
        self.kernel.execute("v = 2")
        assert tracker.user_defined_variables()["v"] == 2

    def test_functions_and_imports_reported(self):
        tracker = BindingTracker(self.kernel)
        self.kernel.execute("import math\ndef f():\n    return 1")
        names = tracker.user_defined_variables()
        assert names["math"].__name__ == "math"
        assert callable(names["f"])

    def test_extra_baseline(self):
        tracker = BindingTracker(self.kernel, extra_baseline=["helper"])
        self.kernel.set_variable("helper", object())
        assert tracker.user_defined_variables() == {}

    def test_noisy_names_in_baseline(self):
        tracker = BindingTracker(self.kernel)
        assert NOISY_NAMES <= tracker.baseline
