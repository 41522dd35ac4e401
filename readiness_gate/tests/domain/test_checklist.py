"""
Unit Tests for the Checklist Evaluator

Covers each field rule variant, the conditional-group laws and the contract
errors raised for arguments the evaluator cannot score.
"""

from types import SimpleNamespace

import pytest

from readiness_gate.domain.feasibility.rules.catalog import CAMERA_RULES, LINE_RULES
from readiness_gate.domain.feasibility.rules.checklist import (
    evaluate_checklist,
    evaluate_rule,
)
from readiness_gate.domain.feasibility.rules.field_rules import (
    CollectionNonEmpty,
    ConditionalGroup,
    Confirmation,
    JointPresence,
    Presence,
    is_present,
    rule_set,
)
from readiness_gate.domain.feasibility.value_objects.enums import TriState
from readiness_gate.domain.shared.exceptions import ErrorType, RuleContractError
from readiness_gate.tests.factories import CameraFactory, LineFactory


class TestIsPresent:
    """Test the two presence policies."""

    @pytest.mark.parametrize("value", ["x", 0, 0.0, False, "0"])
    def test_non_blank_policy_accepts(self, value):
        assert is_present(value)

    @pytest.mark.parametrize("value", [None, ""])
    def test_non_blank_policy_rejects(self, value):
        assert not is_present(value)

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False])
    def test_truthy_policy_rejects_falsy(self, value):
        assert not is_present(value, truthy=True)

    def test_truthy_policy_accepts_numeric_string_zero(self):
        """Measurements arrive as strings; "0" is a non-empty string."""
        assert is_present("0", truthy=True)


class TestRuleVariants:
    """Test each rule variant adds exactly one check."""

    def test_presence_pass_and_fail(self):
        rule = Presence("Name", lambda e: e.name)

        passed = evaluate_rule(rule, SimpleNamespace(name="Line 1"))
        failed = evaluate_rule(rule, SimpleNamespace(name=None))

        assert (passed.passed, passed.total, passed.gaps) == (1, 1, ())
        assert (failed.passed, failed.total, failed.gaps) == (0, 1, ("Name",))

    def test_joint_presence_is_one_check_with_a_gap_per_missing_field(self):
        rule = JointPresence((("A", lambda e: e.a), ("B", lambda e: e.b)))

        both_missing = evaluate_rule(rule, SimpleNamespace(a=None, b=""))
        one_missing = evaluate_rule(rule, SimpleNamespace(a="x", b=None))
        none_missing = evaluate_rule(rule, SimpleNamespace(a="x", b="y"))

        assert both_missing.total == 1
        assert both_missing.passed == 0
        assert both_missing.gaps == ("A", "B")
        assert one_missing.gaps == ("B",)
        assert none_missing.passed == 1
        assert none_missing.gaps == ()

    def test_collection_non_empty(self):
        rule = CollectionNonEmpty("Items", lambda e: e.items)

        assert evaluate_rule(rule, SimpleNamespace(items=[1])).passed == 1
        assert evaluate_rule(rule, SimpleNamespace(items=[])).gaps == ("Items",)
        assert evaluate_rule(rule, SimpleNamespace(items=None)).gaps == ("Items",)

    @pytest.mark.parametrize(
        "value,passes", [(True, True), (False, False), (None, False), ("yes", False)]
    )
    def test_confirmation_requires_exact_true(self, value, passes):
        rule = Confirmation("Confirmed", lambda e: e.flag)

        result = evaluate_rule(rule, SimpleNamespace(flag=value))

        assert result.total == 1
        assert (result.passed == 1) is passes

    def test_unknown_rule_type_is_a_contract_error(self):
        with pytest.raises(RuleContractError) as exc_info:
            evaluate_rule(object(), SimpleNamespace())

        assert exc_info.value.error_type == ErrorType.CONTRACT_VIOLATION


class TestConditionalGroup:
    """Test the conditional-group laws."""

    @pytest.fixture
    def group(self):
        return ConditionalGroup(
            "Confirm whether lighting is required",
            lambda e: e.flag,
            dependents=(
                Presence("Light Model", lambda e: e.light),
                CollectionNonEmpty("Relay", lambda e: e.relays),
            ),
        )

    def test_unset_fails_governing_and_counts_no_dependents(self, group):
        result = evaluate_rule(group, SimpleNamespace(flag=None, light=None, relays=[]))

        assert result.total == 1
        assert result.passed == 0
        assert result.gaps == ("Confirm whether lighting is required",)

    def test_no_passes_governing_and_counts_no_dependents(self, group):
        result = evaluate_rule(group, SimpleNamespace(flag=False, light=None, relays=[]))

        assert result.total == 1
        assert result.passed == 1
        assert result.gaps == ()

    def test_yes_counts_every_dependent_independently(self, group):
        result = evaluate_rule(group, SimpleNamespace(flag=True, light="L1", relays=[]))

        assert result.total == 3
        assert result.passed == 2
        assert result.gaps == ("Relay",)

    def test_accepts_explicit_tri_state(self, group):
        result = evaluate_rule(
            group, SimpleNamespace(flag=TriState.YES, light="L1", relays=[1])
        )

        assert (result.passed, result.total) == (3, 3)

    def test_governing_only_group(self):
        group = ConditionalGroup("Confirm whether HMI is required", lambda e: e.flag)

        assert evaluate_rule(group, SimpleNamespace(flag=True)).total == 1
        assert evaluate_rule(group, SimpleNamespace(flag=None)).passed == 0


class TestEvaluateChecklist:
    """Test the reducer over ordered rule sets."""

    def test_missing_entity_is_a_contract_error(self):
        with pytest.raises(RuleContractError):
            evaluate_checklist(None, LINE_RULES)

    def test_empty_rule_set(self):
        result = evaluate_checklist(SimpleNamespace(), rule_set())

        assert (result.passed, result.total, result.gaps) == (0, 0, ())
        assert result.percentage == 0

    def test_gaps_follow_rule_order(self):
        line = LineFactory.create(line_name=None, photos_url="", number_of_artworks=None)

        result = evaluate_checklist(line, LINE_RULES)

        assert result.total == 8
        assert result.passed == 5
        assert result.gaps == ("Line Name", "Photos URL", "Number of Artworks")

    def test_line_scalar_zero_counts_as_set(self):
        line = LineFactory.create(min_speed=0, number_of_products=0)

        result = evaluate_checklist(line, LINE_RULES)

        assert result.passed == result.total == 8

    def test_complete_camera_passes_every_check(self, complete_camera):
        result = evaluate_checklist(complete_camera, CAMERA_RULES)

        # 8 flat checks, lighting 2, PLC 3, HMI 1, 3 confirmations, description 1
        assert result.total == 18
        assert result.passed == 18
        assert result.gaps == ()

    def test_blank_camera_reports_governing_gaps_only(self):
        result = evaluate_checklist(CameraFactory.blank(), CAMERA_RULES)

        assert result.total == 15
        assert result.passed == 0
        assert "Camera Name" in result.gaps
        assert "Camera Model" in result.gaps
        assert "Confirm whether lighting is required" in result.gaps
        assert "Light Model (required when lighting enabled)" not in result.gaps

    def test_camera_measurement_zero_is_a_gap(self):
        camera = CameraFactory.create(horizontal_fov=0)

        result = evaluate_checklist(camera, CAMERA_RULES)

        assert result.gaps == ("Horizontal FOV",)

    def test_name_and_model_are_one_check(self):
        camera = CameraFactory.create(name=None, model=None)

        result = evaluate_checklist(camera, CAMERA_RULES)

        assert result.total == 18
        assert result.passed == 17
        assert result.gaps[:2] == ("Camera Name", "Camera Model")

    def test_evaluation_is_idempotent(self, complete_camera):
        camera = complete_camera.model_copy(update={"light_id": None})

        first = evaluate_checklist(camera, CAMERA_RULES)
        second = evaluate_checklist(camera, CAMERA_RULES)

        assert first == second
