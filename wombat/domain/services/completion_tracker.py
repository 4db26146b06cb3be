"""Dual-role completion tracker.

The record stores progress per role, not per phase. This projection turns
(record, viewer role) into "I completed" / "partner completed" booleans for
every step so the UI shell can gate its inputs. Pure and synchronous: it is
recomputed on every snapshot the store delivers.
"""

from __future__ import annotations

from dataclasses import dataclass

from wombat.domain.models.problem import Problem, ProblemStatus, Role, RoleProgress


@dataclass(frozen=True)
class StepProgress:
    """Completion of one step, seen from the viewer."""

    mine: bool = False
    partner: bool = False

    @property
    def both(self) -> bool:
        return self.mine and self.partner


@dataclass(frozen=True)
class CompletionView:
    """Per-viewer projection of a Problem.

    Every flag is False when no problem is loaded.
    """

    problem: Problem | None = None
    my_role: Role | None = None
    partner_role: Role | None = None
    i_have_agreed: bool = False
    partner_has_agreed: bool = False
    i_have_submitted: bool = False
    partner_has_submitted: bool = False
    i_have_submitted_steelman: bool = False
    partner_has_submitted_steelman: bool = False
    i_have_approved: bool = False
    partner_has_approved: bool = False
    i_have_proposed: bool = False
    partner_has_proposed: bool = False
    i_have_submitted_solution_steelman: bool = False
    partner_has_submitted_solution_steelman: bool = False
    i_have_agreed_solution: bool = False
    partner_has_agreed_solution: bool = False
    i_have_submitted_post_mortem: bool = False
    partner_has_submitted_post_mortem: bool = False

    @classmethod
    def empty(cls) -> CompletionView:
        """The "no problem loaded" shape."""
        return cls()

    @property
    def is_loaded(self) -> bool:
        return self.problem is not None and self.my_role is not None

    def step(self, status: ProblemStatus) -> StepProgress:
        """Completion pair for the role-paired step of ``status``.

        Phases with no role-paired step (translation, ai_review, wager)
        report both sides as not completed.
        """
        pairs: dict[ProblemStatus, tuple[bool, bool]] = {
            ProblemStatus.AGREE_STATEMENT: (self.i_have_agreed, self.partner_has_agreed),
            ProblemStatus.PRIVATE_VERSIONS: (
                self.i_have_submitted,
                self.partner_has_submitted,
            ),
            ProblemStatus.STEELMAN: (
                self.i_have_submitted_steelman,
                self.partner_has_submitted_steelman,
            ),
            ProblemStatus.STEELMAN_APPROVAL: (
                self.i_have_approved,
                self.partner_has_approved,
            ),
            ProblemStatus.PROPOSE_SOLUTIONS: (
                self.i_have_proposed,
                self.partner_has_proposed,
            ),
            ProblemStatus.SOLUTION_STEELMAN: (
                self.i_have_submitted_solution_steelman,
                self.partner_has_submitted_solution_steelman,
            ),
            ProblemStatus.SOLUTION: (
                self.i_have_agreed_solution,
                self.partner_has_agreed_solution,
            ),
            ProblemStatus.RESOLVED: (
                self.i_have_submitted_post_mortem,
                self.partner_has_submitted_post_mortem,
            ),
        }
        mine, partner = pairs.get(status, (False, False))
        return StepProgress(mine=mine, partner=partner)

    @property
    def current_step(self) -> StepProgress:
        """Completion pair for whichever phase is current."""
        if self.problem is None:
            return StepProgress()
        return self.step(self.problem.status)

    @property
    def awaiting_partner(self) -> bool:
        """I finished the current step and my partner has not."""
        current = self.current_step
        return current.mine and not current.partner

    @property
    def partner_private_version_visible(self) -> bool:
        """Whether the UI may show the partner's private version.

        Private versions are concealed by convention until both have been
        submitted, which is exactly when the record reaches translation.
        """
        if self.problem is None:
            return False
        return not self.problem.status.precedes(ProblemStatus.TRANSLATION)


def compute_completion(problem: Problem | None, viewer_role: Role | None) -> CompletionView:
    """Project ``problem`` for the participant holding ``viewer_role``.

    Args:
        problem: The latest snapshot, or None when nothing is loaded.
        viewer_role: The viewer's role, or None when unknown.

    Returns:
        CompletionView; CompletionView.empty() when either input is absent.
    """
    if problem is None or viewer_role is None:
        return CompletionView.empty()

    partner_role = viewer_role.partner
    mine: RoleProgress = problem.progress_for(viewer_role)
    theirs: RoleProgress = problem.progress_for(partner_role)

    return CompletionView(
        problem=problem,
        my_role=viewer_role,
        partner_role=partner_role,
        i_have_agreed=mine.agreed_problem,
        partner_has_agreed=theirs.agreed_problem,
        i_have_submitted=mine.submitted_private,
        partner_has_submitted=theirs.submitted_private,
        i_have_submitted_steelman=mine.submitted_steelman,
        partner_has_submitted_steelman=theirs.submitted_steelman,
        i_have_approved=mine.approved_steelman,
        partner_has_approved=theirs.approved_steelman,
        i_have_proposed=bool(mine.proposed_solution),
        partner_has_proposed=bool(theirs.proposed_solution),
        i_have_submitted_solution_steelman=bool(mine.solution_steelman),
        partner_has_submitted_solution_steelman=bool(theirs.solution_steelman),
        i_have_agreed_solution=mine.agreed_solution,
        partner_has_agreed_solution=theirs.agreed_solution,
        i_have_submitted_post_mortem=bool(mine.post_mortem),
        partner_has_submitted_post_mortem=bool(theirs.post_mortem),
    )


def completion_for_participant(
    problem: Problem | None, participant_id: str | None
) -> CompletionView:
    """Project ``problem`` for a participant identity.

    Identities that are not participants get the empty view.
    """
    if problem is None or participant_id is None:
        return CompletionView.empty()
    return compute_completion(problem, problem.roles.get(participant_id))
