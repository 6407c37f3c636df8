"""Role checks for teachers and parents."""

from kindrid.domain.access import UserRole, Viewer
from kindrid.domain.errors import PermissionDeniedError
from kindrid.domain.photos import Photo


def can_manage_consent(viewer: Viewer, photo: Photo) -> bool:
    """Teachers manage any photo; parents only photos showing their children."""
    if viewer.role is UserRole.TEACHER:
        return True
    return any(child in viewer.children for child in photo.children)


def require_teacher(viewer: Viewer, action: str) -> None:
    """Raise unless the viewer is a teacher."""
    if viewer.role is not UserRole.TEACHER:
        raise PermissionDeniedError(f"Only teachers can {action}")


def require_consent_manager(
    viewer: Viewer, photo: Photo, names: list[str] | None = None
) -> None:
    """Raise unless the viewer may decide consent for `names` on the photo."""
    if not can_manage_consent(viewer, photo):
        raise PermissionDeniedError("User cannot manage consent for this photo")
    if viewer.role is UserRole.PARENT and names:
        others = sorted(name for name in names if name not in viewer.children)
        if others:
            raise PermissionDeniedError(
                f"Parents can only decide for their own children: {others}"
            )


def photos_for_viewer(viewer: Viewer, photos: list[Photo]) -> list[Photo]:
    """Filter photos down to what the viewer is allowed to see."""
    if viewer.role is UserRole.TEACHER:
        return list(photos)
    return [photo for photo in photos if can_manage_consent(viewer, photo)]
