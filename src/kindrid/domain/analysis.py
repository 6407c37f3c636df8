"""Models for simulated AI annotations and edits."""

from pydantic import BaseModel, Field


class PersonDetection(BaseModel):
    """Single detected subject in a photo."""

    id: str
    name: str
    confidence: float = Field(ge=0.0, le=1.0)
    bbox: tuple[float, float, float, float]


class BackgroundAnalysis(BaseModel):
    """Scene description used to judge background reconstruction."""

    type: str
    elements: list[str]
    complexity: str
    reconstruction_difficulty: str


class AnnotationBundle(BaseModel):
    """Annotations attached to a photo once analysis completes."""

    person_detection: list[PersonDetection]
    background_analysis: BackgroundAnalysis

    def find_person(self, subject_id: str) -> PersonDetection | None:
        """Return the detection with the given id, if present."""
        for person in self.person_detection:
            if person.id == subject_id:
                return person
        return None


class BackgroundReconstruction(BaseModel):
    """Quality report for a rebuilt background."""

    quality: str
    seamless: bool
    artifacts: str


class RemovalResult(BaseModel):
    """Result descriptor for removing a subject from a photo."""

    success: bool
    photo_id: str
    subject_id: str
    background_reconstruction: BackgroundReconstruction
    processing_time: str
    model_version: str
