import random

import pytest

from gen_data import gen_enquiry_form
from intake.normalizers import get_default_normalizer


@pytest.mark.parametrize("legacy", [False, True])
def test_generated_forms_normalize_cleanly(legacy):
    random.seed(7)
    norm = get_default_normalizer()
    for _ in range(50):
        form = gen_enquiry_form(legacy=legacy)
        rec = norm.normalize(form)
        assert rec.child_name
        assert rec.family_name.startswith("the ") and rec.family_name.endswith(" family")
        assert rec.stage in {"Lower", "Upper", "Senior"}
        assert rec.boarding_preference in {"Full Boarding", "Day", "Considering Both"}
        assert rec.academic_interests


def test_legacy_forms_use_old_keys():
    random.seed(1)
    form = gen_enquiry_form(legacy=True)
    assert "childAge" in form and "stage" not in form
    assert "priorities" not in form
    assert get_default_normalizer().normalize(form).priorities.academic == int(form["academic"])
