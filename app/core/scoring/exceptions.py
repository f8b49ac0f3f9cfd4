"""
Exceptions raised by the scoring pipeline.
"""


class ScoringError(Exception):
    """Base class for scoring pipeline errors."""


class InvitationNotFoundError(ScoringError):
    """The submission references an invitation that does not exist."""

    def __init__(self, invitation_id):
        self.invitation_id = invitation_id
        super().__init__(f"Invitation {invitation_id} not found")


class UnknownTestError(ScoringError):
    """The invitation points at a test definition that does not exist."""

    def __init__(self, test_id):
        self.test_id = test_id
        super().__init__(f"Test {test_id} not found")


class InvitationTestMismatchError(ScoringError):
    """The submission names a different test than its invitation."""

    def __init__(self, submitted_test_id, invitation_test_id):
        self.submitted_test_id = submitted_test_id
        self.invitation_test_id = invitation_test_id
        super().__init__(
            f"Submitted test {submitted_test_id} does not match invitation test {invitation_test_id}"
        )
