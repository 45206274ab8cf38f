"""Exercise catalog for free training."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .state_machine import PlannedExercise

FREE_REST_SECONDS = 90
DEFAULT_SETS = 3
DEFAULT_REPS = "12"

EXERCISE_DATABASE: Dict[str, List[str]] = {
    "Pecho": [
        "Press banca",
        "Press inclinado mancuernas",
        "Aperturas con mancuernas",
        "Fondos en paralelas",
        "Press declinado",
        "Pullover",
        "Cruces en polea",
        "Flexiones",
    ],
    "Espalda": [
        "Dominadas",
        "Remo con barra",
        "Remo con mancuerna",
        "Jalón al pecho",
        "Remo en polea baja",
        "Peso muerto",
        "Pull-ups",
        "Face pulls",
    ],
    "Hombros": [
        "Press militar",
        "Elevaciones laterales",
        "Elevaciones frontales",
        "Pájaros",
        "Press Arnold",
        "Encogimientos",
        "Remo al mentón",
    ],
    "Bíceps": [
        "Curl con barra",
        "Curl alterno mancuernas",
        "Curl martillo",
        "Curl concentrado",
        "Curl predicador",
        "Curl en polea",
        "Curl 21s",
    ],
    "Tríceps": [
        "Press francés",
        "Extensiones en polea",
        "Fondos en banco",
        "Patada de tríceps",
        "Press cerrado",
        "Extensiones sobre cabeza",
        "Dips en máquina",
    ],
    "Piernas": [
        "Sentadilla",
        "Prensa",
        "Extensión de cuádriceps",
        "Curl femoral",
        "Zancadas",
        "Peso muerto rumano",
        "Hip thrust",
        "Sentadilla búlgara",
        "Elevación de gemelos",
    ],
    "Core": [
        "Plancha",
        "Crunch",
        "Russian twists",
        "Elevación de piernas",
        "Ab wheel",
        "Mountain climbers",
        "Plancha lateral",
        "Dead bug",
    ],
    "Cardio": [
        "Cinta de correr",
        "Bicicleta estática",
        "Elíptica",
        "Remo ergómetro",
        "Saltar cuerda",
        "Burpees",
        "Jumping jacks",
        "Sprint en cinta",
    ],
}

MUSCLE_GROUPS = tuple(EXERCISE_DATABASE)


@dataclass
class SelectedExercise:
    name: str
    muscle_group: str
    sets: int = DEFAULT_SETS
    reps: str = DEFAULT_REPS

    def to_planned(self) -> PlannedExercise:
        return PlannedExercise(
            name=self.name,
            sets=self.sets,
            reps=self.reps,
            rest_seconds=FREE_REST_SECONDS,
            muscle_group=self.muscle_group,
        )


def search_exercises(query: str = "") -> Dict[str, List[str]]:
    """Case-insensitive substring search; groups without matches are omitted."""
    query = query.strip().lower()
    if not query:
        return {group: list(names) for group, names in EXERCISE_DATABASE.items()}
    results: Dict[str, List[str]] = {}
    for group, names in EXERCISE_DATABASE.items():
        matches = [name for name in names if query in name.lower()]
        if matches:
            results[group] = matches
    return results


def muscle_group_of(exercise_name: str) -> Optional[str]:
    for group, names in EXERCISE_DATABASE.items():
        if exercise_name in names:
            return group
    return None


def select_exercise(exercise_name: str) -> SelectedExercise:
    """Selection with the default 3 x 12 prescription.

    Raises:
        KeyError: The exercise is not in the catalog
    """
    group = muscle_group_of(exercise_name)
    if group is None:
        raise KeyError(exercise_name)
    return SelectedExercise(name=exercise_name, muscle_group=group)
