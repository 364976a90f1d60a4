"""BDD tests for record normalization features."""

import pytest
from pytest_bdd import scenarios

# Load all normalization feature scenarios
scenarios(".")

pytestmark = [
    pytest.mark.tier(1),
    pytest.mark.tra("Pipeline.Normalization"),
]
