"""Form analysis result models.

The vision model answers with free text that should contain one JSON object.
Parsing yields a tagged result so callers branch explicitly:

    result = parse_form_analysis(text)
    if isinstance(result, Parsed): ...
    else: ...  # Fallback
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Severity(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    ERROR = "error"


class Depth(str, Enum):
    SHALLOW = "shallow"
    PARALLEL = "parallel"
    DEEP = "deep"


DEPTH_SCORES = ("Malo", "Regular", "Bueno", "Excelente")


@dataclass
class FormIssue:
    body_part: str
    severity: Severity
    message: str
    correction: str
    angle: Optional[float] = None
    ideal_angle: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "bodyPart": self.body_part,
            "severity": self.severity.value,
            "message": self.message,
            "correction": self.correction,
        }
        if self.angle is not None:
            data["angle"] = self.angle
        if self.ideal_angle is not None:
            data["idealAngle"] = self.ideal_angle
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormIssue":
        return cls(
            body_part=str(data["bodyPart"]),
            severity=Severity(data.get("severity", "warning")),
            message=str(data.get("message", "")),
            correction=str(data.get("correction", "")),
            angle=data.get("angle"),
            ideal_angle=data.get("idealAngle"),
        )


@dataclass
class BodyPointStatus:
    """Traffic-light status for one tracked body point (knees, hips...)."""
    name: str
    status: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BodyPointStatus":
        return cls(name=str(data["name"]), status=Severity(data.get("status", "warning")))


@dataclass
class FormAnalysis:
    overall_score: float
    issues: List[FormIssue] = field(default_factory=list)
    tempo: Optional[float] = None
    depth: Optional[Depth] = None
    depth_score: Optional[str] = None
    body_points: List[BodyPointStatus] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "overallScore": self.overall_score,
            "issues": [issue.to_dict() for issue in self.issues],
            "tempo": self.tempo,
            "depth": self.depth.value if self.depth else None,
            "depthScore": self.depth_score,
        }
        if self.body_points:
            data["bodyPoints"] = [point.to_dict() for point in self.body_points]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormAnalysis":
        """Build from the model's JSON; raises KeyError/ValueError/TypeError on bad shape."""
        depth = data.get("depth")
        tempo = data.get("tempo")
        return cls(
            overall_score=float(data["overallScore"]),
            issues=[FormIssue.from_dict(i) for i in data.get("issues") or []],
            tempo=float(tempo) if tempo is not None else None,
            depth=Depth(depth) if depth else None,
            depth_score=data.get("depthScore"),
            body_points=[BodyPointStatus.from_dict(p) for p in data.get("bodyPoints") or []],
        )


def fallback_analysis() -> FormAnalysis:
    """Analysis returned when the model output cannot be used."""
    return FormAnalysis(
        overall_score=75,
        issues=[
            FormIssue(
                body_part="general",
                severity=Severity.WARNING,
                message="No se pudo analizar la imagen correctamente",
                correction="Intenta con mejor iluminación y ángulo",
            )
        ],
        tempo=2.0,
        depth=Depth.PARALLEL,
        depth_score="Regular",
    )


@dataclass
class Parsed:
    analysis: FormAnalysis


@dataclass
class Fallback:
    reason: str
    analysis: FormAnalysis = field(default_factory=fallback_analysis)


AnalysisResult = Union[Parsed, Fallback]
