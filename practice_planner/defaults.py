"""Default skills for a fresh configuration."""

from __future__ import annotations

from datetime import timedelta

from .models import Exercise, PlannerConfiguration, Skill

DEFAULT_SKILLS: tuple[Skill, ...] = (
    Skill(
        name="Ear Training",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Ear Training Exercises
## Exercise #1

Perform one of the exercises from [Justinguitar](https://www.justinguitar.com/guitar-lessons/justin-ear-training-exercises-s1-bc-118).
""",
            ),
            Exercise(
                name="Exercise 2",
                text="""# Ear Training Exercises
## Exercise #2

Play random two-note dyads and try to identify the intervals by sound.
""",
            ),
        ),
    ),
    Skill(
        name="Left Hand Exercises",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Left Hand Exercises
## Exercise #1

Practice the following pattern starting at every fret from 1 to 12, starting at a lower tempo with equal note durations.

Either alternate pick or use all downstrokes.

```
e|---------------------------------1-2-3-4-|
B|-------------------------1-2-3-4---------|
G|-----------------1-2-3-4-----------------|
D|---------1-2-3-4-------------------------|
A|-1-2-3-4---------------------------------|
E|-----------------------------------------|
```
""",
            ),
        ),
    ),
    Skill(
        name="Alternate Picking Exercises",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Alternate Picking Exercises
## Exercise #1

Practice the following pattern starting at every fret from 1 to 12, starting at a lower tempo with equal note durations.

Use alternate picking. Try starting with either an upstroke or downstroke.

```
B|-----------------------------------2---4-|
G|-------------------2---4---1---3---------|
D|---2---4---1---3-------------------------|
A|-1---3---------------------------------- |
```
""",
            ),
        ),
    ),
    Skill(
        name="Chords",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Chord Exercises
## Exercise #1

Play every major chord from A to G in root position, and then every minor chord.

Move up to the next position and repeat.
""",
            ),
        ),
    ),
    Skill(
        name="Scales",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Scale Exercises
## Exercise #1

Play a scale to a metronome in different positions. Increase the tempo after you've played the scale perfectly four times.
""",
            ),
        ),
    ),
    Skill(
        name="Sight Reading",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Sight Reading Exercises
## Exercise #1

Read and play a passage of standard notation you have not seen before, slowly and without stopping.
""",
            ),
        ),
    ),
    Skill(
        name="Music Theory",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Music Theory Exercises
## Exercise #1

For every note A to G, play the note and then the relative minor.
""",
            ),
        ),
    ),
    Skill(
        name="Improvisation",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Improvisation Exercises
## Exercise #1

Play along to a backing track.
""",
            ),
        ),
    ),
    Skill(
        name="Songwriting",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Songwriting Exercises
## Exercise #1

Work on a song.

Maybe you could write about your song here.
""",
            ),
        ),
    ),
    Skill(
        name="Rhythm",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Rhythm Exercises
## Exercise #1

Play an open string along to a metronome at a slow tempo.

Alternate playing whole measures as quarter notes and eighth notes.
""",
            ),
        ),
    ),
    Skill(
        name="Learn A Song",
        exercises=(
            Exercise(
                name="Exercise 1",
                text="""# Learn A Song
## Exercise #1

Work on learning that song you wanted to play.

Keep a link to a lesson or a recording here, for example a YouTube video.
""",
            ),
        ),
    ),
)


def default_configuration(
    practice_minutes: int = 15,
    repeat_threshold: int = 2,
    skills_per_day: int = 4,
) -> PlannerConfiguration:
    """A fresh configuration holding the default skills."""
    return PlannerConfiguration(
        practice_duration=timedelta(minutes=practice_minutes),
        repeat_threshold=repeat_threshold,
        skills_per_day=skills_per_day,
        skills=list(DEFAULT_SKILLS),
    )
