"""Unit tests for the dual-role completion tracker."""

from __future__ import annotations

from datetime import datetime, timezone

from tests.helpers.problem_builders import new_problem, problem_at
from wombat.domain.models.problem import ProblemStatus, Role
from wombat.domain.models.problem_action import AgreeProblem, SubmitPrivateVersion
from wombat.domain.services.completion_tracker import (
    CompletionView,
    StepProgress,
    completion_for_participant,
    compute_completion,
)
from wombat.domain.services.transition_engine import transition

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestEmptyView:
    """No problem or no role yields the all-false shape."""

    def test_no_problem(self) -> None:
        view = compute_completion(None, Role.ROLE_A)
        assert view == CompletionView.empty()
        assert not view.is_loaded
        assert view.current_step == StepProgress()

    def test_no_role(self) -> None:
        assert compute_completion(new_problem(), None) == CompletionView.empty()

    def test_stranger_gets_empty_view(self) -> None:
        assert completion_for_participant(new_problem(), "mallory") == CompletionView.empty()


class TestPartnerInversion:
    """"Partner" resolves to the other role for either viewer."""

    def test_role_a_agreed_seen_from_both_sides(self) -> None:
        problem = new_problem()
        problem = problem.apply(transition(problem, AgreeProblem(), Role.ROLE_A, NOW).update)

        view_a = compute_completion(problem, Role.ROLE_A)
        view_b = compute_completion(problem, Role.ROLE_B)

        assert view_a.i_have_agreed and not view_a.partner_has_agreed
        assert view_b.partner_has_agreed and not view_b.i_have_agreed
        assert view_a.partner_role is Role.ROLE_B
        assert view_b.partner_role is Role.ROLE_A

    def test_awaiting_partner(self) -> None:
        problem = new_problem()
        problem = problem.apply(transition(problem, AgreeProblem(), Role.ROLE_B, NOW).update)
        assert compute_completion(problem, Role.ROLE_B).awaiting_partner
        assert not compute_completion(problem, Role.ROLE_A).awaiting_partner

    def test_completion_for_participant_resolves_role(self) -> None:
        problem = new_problem(initiator_id="alice", partner_id="bob")
        view = completion_for_participant(problem, "bob")
        assert view.my_role is Role.ROLE_B
        assert view.is_loaded


class TestSteps:
    def test_step_pairs_for_resolved_problem(self) -> None:
        problem = problem_at(ProblemStatus.RESOLVED)
        view = compute_completion(problem, Role.ROLE_A)
        for status in (
            ProblemStatus.AGREE_STATEMENT,
            ProblemStatus.PRIVATE_VERSIONS,
            ProblemStatus.STEELMAN,
            ProblemStatus.STEELMAN_APPROVAL,
            ProblemStatus.PROPOSE_SOLUTIONS,
            ProblemStatus.SOLUTION_STEELMAN,
            ProblemStatus.SOLUTION,
        ):
            assert view.step(status).both, status
        assert view.step(ProblemStatus.RESOLVED) == StepProgress(False, False)

    def test_phases_without_paired_step(self) -> None:
        view = compute_completion(problem_at(ProblemStatus.WAGER), Role.ROLE_A)
        for status in (ProblemStatus.TRANSLATION, ProblemStatus.AI_REVIEW, ProblemStatus.WAGER):
            assert view.step(status) == StepProgress()

    def test_current_step_tracks_status(self) -> None:
        problem = problem_at(ProblemStatus.PRIVATE_VERSIONS)
        action = SubmitPrivateVersion(text="mine", translation="t")
        problem = problem.apply(transition(problem, action, Role.ROLE_A, NOW).update)
        view = compute_completion(problem, Role.ROLE_A)
        assert view.current_step == StepProgress(mine=True, partner=False)
        assert view.i_have_submitted and not view.partner_has_submitted


class TestPrivateVersionVisibility:
    def test_hidden_while_collecting_private_versions(self) -> None:
        view = compute_completion(problem_at(ProblemStatus.PRIVATE_VERSIONS), Role.ROLE_A)
        assert not view.partner_private_version_visible

    def test_visible_from_translation(self) -> None:
        for status in (ProblemStatus.TRANSLATION, ProblemStatus.AI_REVIEW):
            view = compute_completion(problem_at(status), Role.ROLE_B)
            assert view.partner_private_version_visible
