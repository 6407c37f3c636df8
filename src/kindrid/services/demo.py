"""Demo photos used when no saved state exists."""

from kindrid.domain.photos import Photo, PhotoStatus


def _demo(  # noqa: PLR0913
    photo_id: str,
    url: str,
    title: str,
    description: str,
    date: str,
    location: str,
    teacher: str,
    children: list[str],
    status: PhotoStatus,
    given: list[str],
    tags: list[str],
    *,
    ai_processed: bool = True,
) -> Photo:
    return Photo(
        id=photo_id,
        url=url,
        title=title,
        description=description,
        date=date,
        location=location,
        teacher=teacher,
        children=children,
        status=status,
        ai_processed=ai_processed,
        consent_given=given,
        consent_pending=[name for name in children if name not in given],
        tags=tags,
    )


def demo_photos() -> list[Photo]:
    """Return fresh copies of the six school demo photos, newest last."""
    return [
        _demo(
            "1",
            "/1.jpg",
            "First Day of School",
            "Class 3A on their first day back to school",
            "2024-09-01",
            "Classroom 3A",
            "Ms. Johnson",
            ["Emma", "Lucas", "Sophia", "Noah", "Ava"],
            PhotoStatus.APPROVED,
            ["Emma", "Lucas", "Sophia", "Noah", "Ava"],
            ["first-day", "classroom", "elementary"],
        ),
        _demo(
            "2",
            "/2.jpeg",
            "Science Fair Winners",
            "Students presenting their science projects",
            "2024-09-15",
            "School Gymnasium",
            "Mr. Davis",
            ["Lucas", "Ava", "Mia", "Ethan", "Zoe"],
            PhotoStatus.PENDING_CONSENT,
            ["Lucas", "Ava"],
            ["science", "fair", "projects"],
        ),
        _demo(
            "3",
            "/3.jpg",
            "Art Class Creativity",
            "Students working on their art projects",
            "2024-09-20",
            "Art Room",
            "Mrs. Wilson",
            ["Sophia", "Noah", "Mia", "Ethan", "Emma"],
            PhotoStatus.PENDING_CONSENT,
            [],
            ["art", "creativity", "projects"],
            ai_processed=False,
        ),
        _demo(
            "4",
            "/4.jpg",
            "Recess Fun",
            "Children playing during recess",
            "2024-09-25",
            "Playground",
            "Ms. Thompson",
            ["Ava", "Zoe", "Lucas", "Sophia", "Noah"],
            PhotoStatus.APPROVED,
            ["Ava", "Zoe", "Lucas", "Sophia", "Noah"],
            ["recess", "playground", "fun"],
        ),
        _demo(
            "5",
            "/5.jpg",
            "Library Reading Time",
            "Students enjoying story time in the library",
            "2024-09-30",
            "School Library",
            "Mrs. Brown",
            ["Emma", "Mia", "Ethan", "Ava", "Lucas"],
            PhotoStatus.PENDING_CONSENT,
            ["Emma", "Mia"],
            ["library", "reading", "story-time"],
        ),
        _demo(
            "6",
            "/6.jpg",
            "Math Class",
            "Students working on math problems",
            "2024-10-05",
            "Math Lab",
            "Mr. Rodriguez",
            ["Sophia", "Noah", "Mia", "Ethan", "Emma", "Ava"],
            PhotoStatus.PENDING_CONSENT,
            ["Sophia", "Noah"],
            ["math", "learning", "classroom"],
        ),
    ]
