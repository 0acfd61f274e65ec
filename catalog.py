from typing import List, Optional

from models import BodyPart, Exercise
from localization import translator


BODY_PARTS: tuple[BodyPart, ...] = (
    BodyPart(id="chest", name="Chest"),
    BodyPart(id="back", name="Back"),
    BodyPart(id="shoulder", name="Shoulders"),
    BodyPart(id="leg", name="Legs"),
    BodyPart(id="arm", name="Arms"),
)

EXERCISES: tuple[Exercise, ...] = (
    Exercise(id="bench_press", body_part_id="chest", name="Bench Press"),
    Exercise(id="dumbbell_fly", body_part_id="chest", name="Dumbbell Fly"),
    Exercise(id="incline_press", body_part_id="chest", name="Incline Press"),
    Exercise(id="lat_pull_down", body_part_id="back", name="Lat Pulldown"),
    Exercise(id="deadlift", body_part_id="back", name="Deadlift"),
    Exercise(id="seated_row", body_part_id="back", name="Seated Row"),
    Exercise(id="shoulder_press", body_part_id="shoulder", name="Shoulder Press"),
    Exercise(id="side_raise", body_part_id="shoulder", name="Side Raise"),
    Exercise(id="rear_raise", body_part_id="shoulder", name="Rear Raise"),
    Exercise(id="squat", body_part_id="leg", name="Squat"),
    Exercise(id="leg_press", body_part_id="leg", name="Leg Press"),
    Exercise(id="leg_curl", body_part_id="leg", name="Leg Curl"),
    Exercise(id="barbell_curl", body_part_id="arm", name="Barbell Curl"),
    Exercise(id="dumbbell_curl", body_part_id="arm", name="Dumbbell Curl"),
    Exercise(id="pushdown", body_part_id="arm", name="Triceps Pushdown"),
)


def body_part(body_part_id: str) -> Optional[BodyPart]:
    return next((b for b in BODY_PARTS if b.id == body_part_id), None)


def exercise(exercise_id: str) -> Optional[Exercise]:
    return next((e for e in EXERCISES if e.id == exercise_id), None)


def exercises_for(body_part_id: str) -> List[Exercise]:
    """Return the catalog exercises belonging to ``body_part_id``."""
    return [e for e in EXERCISES if e.body_part_id == body_part_id]


def lookup_body_part(body_part_id: str, translate: bool = False) -> str:
    """Return the body part name, or the id itself when unknown."""
    found = body_part(body_part_id)
    if found is None:
        return body_part_id
    return translator.gettext(found.name) if translate else found.name


def lookup_exercise(exercise_id: str, translate: bool = False) -> str:
    """Return the exercise name, or the id itself when unknown."""
    found = exercise(exercise_id)
    if found is None:
        return exercise_id
    return translator.gettext(found.name) if translate else found.name
