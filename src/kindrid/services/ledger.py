"""Consent ledger operations over a photo's granted and pending names."""

from kindrid.domain.photos import Photo


def grant(photo: Photo, subject_name: str) -> Photo:
    """Move a name into the granted set."""
    given = list(photo.consent_given)
    if subject_name not in given:
        given.append(subject_name)
    pending = [name for name in photo.consent_pending if name != subject_name]
    return photo.model_copy(update={"consent_given": given, "consent_pending": pending})


def revoke(photo: Photo, subject_name: str) -> Photo:
    """Move a name into the pending set."""
    given = [name for name in photo.consent_given if name != subject_name]
    pending = list(photo.consent_pending)
    if subject_name not in pending:
        pending.append(subject_name)
    return photo.model_copy(update={"consent_given": given, "consent_pending": pending})


def is_fully_resolved(photo: Photo) -> bool:
    """Return True when no subject is waiting for consent."""
    return not photo.consent_pending


def repartition(photo: Photo, children: list[str]) -> Photo:
    """Fit the consent sets to a new children list.

    Names that stay keep their decision, new names start pending and
    dropped names leave both sets.
    """
    given = [name for name in photo.consent_given if name in children]
    pending = [name for name in children if name not in given]
    return photo.model_copy(
        update={
            "children": list(children),
            "consent_given": given,
            "consent_pending": pending,
        }
    )
