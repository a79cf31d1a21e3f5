"""Exceptions métier levées par le service des demandes de couverture."""


class InvalidEthiopianInput(ValueError):
    """Saisie de date ou d'heure éthiopienne non analysable."""

    def __init__(self, field: str, value: str):
        super().__init__(f"invalid_{field}:{value}")
        self.field = field
        self.value = value


class SubmissionWindowClosed(ValueError):
    """La date demandée est hors de la fenêtre de soumission."""

    def __init__(self, reason: str, message: str):
        super().__init__(reason)
        self.reason = reason
        self.message = message


class CoverageRequestNotFound(KeyError):
    """Aucune demande avec cet identifiant."""


class AlreadyReviewed(ValueError):
    """La demande a déjà été acceptée ou refusée."""


class RejectionReasonRequired(ValueError):
    """Un refus doit être accompagné d'un motif non vide."""
