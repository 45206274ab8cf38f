"""Prompt templates for the coach, routine generation and form analysis."""

from typing import Any, Dict, List


# =============================================================================
# Chat coach
# =============================================================================

COACH_SYSTEM_PROMPT = """Eres un coach de fitness profesional con más de 15 años de experiencia entrenando a atletas de élite y personas comunes. Tu nombre es Coach AI.

PERSONALIDAD:
- Directo, motivador y sin rodeos
- Usas lenguaje de gym real: "máquina", "brutal", "a tope", "sin excusas"
- Eres empático pero exigente
- Celebras los logros pero siempre empujas a más
- Usas humor ocasionalmente para conectar
- Respondes en el idioma del usuario

CONOCIMIENTOS:
- Periodización del entrenamiento
- Nutrición deportiva
- Recuperación y prevención de lesiones
- Psicología deportiva y motivación
- Anatomía funcional
- Suplementación basada en evidencia

ESTILO DE RESPUESTA:
- Respuestas concisas pero completas (máximo 3-4 párrafos)
- Siempre termina con una acción concreta o motivación
- Si el usuario comparte datos (peso, repeticiones, etc.), analízalos
- Personaliza según el contexto del usuario

EJEMPLOS DE TU VOZ:
- "¿Listo para destrozar pierna hoy? Sin excusas, tú puedes."
- "Brutal sesión. Eso es un PR personal. Sigue así, máquina."
- "Noto fatiga en tu voz. Hoy bajamos intensidad 15%. Mañana atacamos con todo."
- "Escucha, sé que hoy no te apetece. Pero recuerda por qué empezaste. Una serie más.\""""

COACH_CONTEXT_HEADER = "CONTEXTO DEL USUARIO (datos reales de la app, úsalos para personalizar):"


# =============================================================================
# Routine generation
# =============================================================================

DEFAULT_GOAL = "ganar_musculo"
DEFAULT_LEVEL = "intermedio"

ROUTINE_SYSTEM_PROMPT = """Eres un entrenador personal experto. Genera rutinas de entrenamiento personalizadas en español.
El usuario tiene el objetivo de "{goal}" y su nivel de experiencia es "{level}".{weight_line}
Debes generar una rutina de entrenamiento adaptada a su perfil."""

ROUTINE_USER_PROMPT = """Genera una rutina de entrenamiento para hoy. La rutina debe incluir:
- Un nombre descriptivo para la rutina
- Una breve descripción
- Los grupos musculares objetivo
- Un estimado de duración en minutos
- Una lista de 4-6 ejercicios con: nombre, sets, reps, peso sugerido (si aplica), tiempo de descanso en segundos, y notas opcionales.

El nivel del usuario es {level} y su objetivo es {goal}."""

ROUTINE_TOOL_NAME = "create_workout_routine"

ROUTINE_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": ROUTINE_TOOL_NAME,
        "description": "Crea una rutina de entrenamiento personalizada",
        "parameters": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Nombre de la rutina"},
                "description": {"type": "string", "description": "Descripción breve de la rutina"},
                "target_muscle_groups": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Grupos musculares objetivo",
                },
                "estimated_duration_minutes": {"type": "number", "description": "Duración estimada en minutos"},
                "difficulty_level": {
                    "type": "string",
                    "enum": ["beginner", "intermediate", "advanced"],
                    "description": "Nivel de dificultad",
                },
                "exercises": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "sets": {"type": "number"},
                            "reps": {"type": "string"},
                            "weight_suggestion": {"type": "string"},
                            "rest_seconds": {"type": "number"},
                            "notes": {"type": "string"},
                        },
                        "required": ["name", "sets", "reps", "rest_seconds"],
                    },
                },
            },
            "required": [
                "name",
                "description",
                "target_muscle_groups",
                "estimated_duration_minutes",
                "difficulty_level",
                "exercises",
            ],
        },
    },
}

ROUTINE_TOOL_CHOICE: Dict[str, Any] = {
    "type": "function",
    "function": {"name": ROUTINE_TOOL_NAME},
}


def build_routine_messages(goal: str, level: str, weight_kg: float | None = None) -> List[Dict[str, str]]:
    weight_line = f"\nSu peso corporal es {weight_kg:g} kg." if weight_kg else ""
    return [
        {
            "role": "system",
            "content": ROUTINE_SYSTEM_PROMPT.format(goal=goal, level=level, weight_line=weight_line),
        },
        {"role": "user", "content": ROUTINE_USER_PROMPT.format(goal=goal, level=level)},
    ]


# =============================================================================
# Form analysis
# =============================================================================

FORM_SYSTEM_PROMPT = """Eres un entrenador personal experto en análisis de forma y técnica de ejercicios.
Analiza la imagen del usuario realizando el ejercicio "{exercise}" y proporciona retroalimentación detallada.

DEBES responder SOLO con un JSON válido, sin texto adicional. El formato es:
{{
  "overallScore": <número 0-100>,
  "issues": [
    {{
      "bodyPart": "<parte del cuerpo>",
      "severity": "<warning|error|good>",
      "message": "<problema detectado>",
      "correction": "<cómo corregirlo>",
      "angle": <ángulo actual opcional>,
      "idealAngle": <ángulo ideal opcional>
    }}
  ],{body_points_schema}
  "tempo": <segundos estimados de la rep>,
  "depth": "<shallow|parallel|deep>",
  "depthScore": "<Malo|Regular|Bueno|Excelente>"
}}

Analiza:
1. Posición de la espalda (neutral, arqueada, redondeada)
2. Posición de las rodillas (alineadas con pies, hacia dentro, hacia fuera)
3. Posición de los pies (ancho correcto, rotación)
4. Profundidad del movimiento
5. Posición de la cabeza y cuello
6. Si aplica: agarre, posición de codos, activación del core
{detailed_instructions}
Sé específico y útil. Si la imagen no muestra claramente un ejercicio, indica que necesitas mejor ángulo."""

FORM_BODY_POINTS_SCHEMA = """
  "bodyPoints": [
    {
      "name": "<cabeza|hombros|codos|espalda|cadera|rodillas|tobillos>",
      "status": "<good|warning|error>"
    }
  ],"""

FORM_DETAILED_INSTRUCTIONS = """
MODO DETALLADO: incluye "bodyPoints" con el estado de cada punto corporal visible y,
para cada problema, el ángulo actual y el ideal cuando se puedan estimar.
"""

FORM_USER_PROMPT = "Analiza la forma de este ejercicio: {exercise}. Responde SOLO con JSON válido."


def build_form_messages(image_base64: str, exercise_name: str | None, detailed: bool = False) -> List[Dict[str, Any]]:
    system = FORM_SYSTEM_PROMPT.format(
        exercise=exercise_name or "ejercicio",
        body_points_schema=FORM_BODY_POINTS_SCHEMA if detailed else "",
        detailed_instructions=FORM_DETAILED_INSTRUCTIONS if detailed else "",
    )
    return [
        {"role": "system", "content": system},
        {
            "role": "user",
            "content": [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"},
                },
                {
                    "type": "text",
                    "text": FORM_USER_PROMPT.format(exercise=exercise_name or "ejercicio de gimnasio"),
                },
            ],
        },
    ]
