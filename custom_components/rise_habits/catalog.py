# File: catalog.py
"""Static task template catalog for the 66-day program.

Templates are grouped by habit category and ordered by day range. Within a
category the ranges cover days 1..66 and difficulty never decreases as the
program advances. Generation iterates TASK_TEMPLATES in this order, so the
order of tasks inside a day follows the category order below.
"""

from __future__ import annotations

from typing import Final

from . import const
from .type_defs import DayRange, TaskTemplate

TASK_TEMPLATES: Final[tuple[TaskTemplate, ...]] = (
    # Sleep
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Set a consistent wake-up time",
        description="Choose a wake-up time and stick to it for the next 7 days",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=1,
        tips=(
            "Place your alarm across the room",
            "Use a gentle alarm sound",
            "Avoid snoozing",
        ),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Create a bedtime routine",
        description="Develop a 30-minute pre-sleep routine",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=30,
        tips=(
            "Read a book",
            "Practice deep breathing",
            "Avoid screens 1 hour before bed",
        ),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Optimize your sleep environment",
        description="Make your bedroom conducive to sleep",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=15,
        tips=(
            "Keep room cool and dark",
            "Use blackout curtains",
            "Remove electronics",
        ),
        day_range=DayRange(15, 21),
    ),
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Practice sleep hygiene",
        description="Implement advanced sleep hygiene practices",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=20,
        tips=(
            "Avoid caffeine after 2 PM",
            "Exercise earlier in the day",
            "Use blue light filters",
        ),
        day_range=DayRange(22, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Master your sleep schedule",
        description="Maintain perfect sleep timing for 2 weeks",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=1,
        tips=(
            "Track your sleep quality",
            "Adjust gradually",
            "Be consistent on weekends",
        ),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_SLEEP,
        title="Advanced sleep optimization",
        description="Fine-tune your sleep for maximum recovery",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=30,
        tips=(
            "Experiment with sleep cycles",
            "Optimize room temperature",
            "Use sleep tracking",
        ),
        day_range=DayRange(43, 66),
    ),
    # Water
    TaskTemplate(
        category=const.CATEGORY_WATER,
        title="Start with 4 glasses daily",
        description="Drink 4 glasses of water throughout the day",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=1,
        tips=(
            "Keep a water bottle nearby",
            "Set reminders",
            "Start with room temperature water",
        ),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_WATER,
        title="Increase to 6 glasses",
        description="Gradually increase to 6 glasses of water daily",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=1,
        tips=("Drink before meals", "Add lemon for flavor", "Track your intake"),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_WATER,
        title="Reach 8 glasses daily",
        description="Achieve the recommended 8 glasses of water",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=1,
        tips=(
            "Use a large water bottle",
            "Set hourly reminders",
            "Monitor urine color",
        ),
        day_range=DayRange(15, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_WATER,
        title="Optimize hydration timing",
        description="Learn when to drink water for maximum benefit",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=1,
        tips=(
            "Drink upon waking",
            "Hydrate before exercise",
            "Avoid late night drinking",
        ),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_WATER,
        title="Advanced hydration strategy",
        description="Develop personalized hydration based on activity",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=5,
        tips=(
            "Calculate needs based on weight",
            "Adjust for exercise",
            "Monitor electrolytes",
        ),
        day_range=DayRange(43, 66),
    ),
    # Exercise
    TaskTemplate(
        category=const.CATEGORY_EXERCISE,
        title="Start with 10-minute walks",
        description="Take a 10-minute walk every day",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=10,
        tips=("Walk after meals", "Use a step counter", "Find scenic routes"),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_EXERCISE,
        title="Increase to 15-minute walks",
        description="Extend your daily walks to 15 minutes",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=15,
        tips=("Add some hills", "Increase pace gradually", "Walk with a friend"),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_EXERCISE,
        title="Add bodyweight exercises",
        description="Include 10 minutes of bodyweight exercises",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=25,
        tips=(
            "Start with push-ups and squats",
            "Use proper form",
            "Rest between sets",
        ),
        day_range=DayRange(15, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_EXERCISE,
        title="Create a workout routine",
        description="Develop a structured 30-minute workout",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=30,
        tips=(
            "Alternate cardio and strength",
            "Track your progress",
            "Stay consistent",
        ),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_EXERCISE,
        title="Advanced fitness program",
        description="Implement a comprehensive fitness program",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=45,
        tips=(
            "Include HIIT workouts",
            "Add flexibility training",
            "Monitor recovery",
        ),
        day_range=DayRange(43, 66),
    ),
    # Mind
    TaskTemplate(
        category=const.CATEGORY_MIND,
        title="Start with 5-minute meditation",
        description="Practice 5 minutes of daily meditation",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=5,
        tips=(
            "Use guided meditation apps",
            "Find a quiet space",
            "Focus on breathing",
        ),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_MIND,
        title="Read for 15 minutes daily",
        description="Read a book for 15 minutes each day",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=15,
        tips=("Choose engaging books", "Read before bed", "Join a book club"),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_MIND,
        title="Practice gratitude journaling",
        description="Write down 3 things you're grateful for daily",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=10,
        tips=(
            "Write in the morning",
            "Be specific",
            "Reflect on small moments",
        ),
        day_range=DayRange(15, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_MIND,
        title="Learn a new skill",
        description="Spend 20 minutes learning something new",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=20,
        tips=("Use online courses", "Practice daily", "Track your progress"),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_MIND,
        title="Advanced mental training",
        description="Implement advanced cognitive training exercises",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=30,
        tips=(
            "Try brain training apps",
            "Learn a language",
            "Practice mindfulness",
        ),
        day_range=DayRange(43, 66),
    ),
    # Screen time
    TaskTemplate(
        category=const.CATEGORY_SCREEN_TIME,
        title="Track your screen time",
        description="Monitor how much time you spend on screens",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=5,
        tips=(
            "Use built-in screen time features",
            "Be honest with yourself",
            "Set daily limits",
        ),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_SCREEN_TIME,
        title="Reduce by 30 minutes",
        description="Cut your daily screen time by 30 minutes",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=1,
        tips=("Delete social media apps", "Use grayscale mode", "Set app limits"),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_SCREEN_TIME,
        title="No screens 1 hour before bed",
        description="Avoid all screens for 1 hour before sleep",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=1,
        tips=("Use night mode", "Read a book instead", "Practice relaxation"),
        day_range=DayRange(15, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_SCREEN_TIME,
        title="Implement screen-free zones",
        description="Create areas in your home where screens are not allowed",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=10,
        tips=(
            "Keep bedroom screen-free",
            "Designate meal times",
            "Use physical books",
        ),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_SCREEN_TIME,
        title="Digital minimalism practice",
        description="Adopt a digital minimalism lifestyle",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=1,
        tips=(
            "Unsubscribe from unnecessary emails",
            "Use focus modes",
            "Practice intentional tech use",
        ),
        day_range=DayRange(43, 66),
    ),
    # Shower
    TaskTemplate(
        category=const.CATEGORY_SHOWER,
        title="Establish shower routine",
        description="Create a consistent daily shower schedule",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=15,
        tips=(
            "Shower at the same time daily",
            "Use invigorating products",
            "Practice good hygiene",
        ),
        day_range=DayRange(1, 7),
    ),
    TaskTemplate(
        category=const.CATEGORY_SHOWER,
        title="Try lukewarm water",
        description="Gradually reduce shower temperature",
        difficulty=const.DIFFICULTY_EASY,
        estimated_time=15,
        tips=(
            "Start with warm water",
            "Gradually reduce temperature",
            "Focus on breathing",
        ),
        day_range=DayRange(8, 14),
    ),
    TaskTemplate(
        category=const.CATEGORY_SHOWER,
        title="Cold shower introduction",
        description="End your shower with 30 seconds of cold water",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=15,
        tips=(
            "Start with just your feet",
            "Focus on your breath",
            "Gradually increase exposure",
        ),
        day_range=DayRange(15, 28),
    ),
    TaskTemplate(
        category=const.CATEGORY_SHOWER,
        title="Extend cold exposure",
        description="Increase cold shower duration to 2 minutes",
        difficulty=const.DIFFICULTY_MEDIUM,
        estimated_time=15,
        tips=(
            "Use the Wim Hof method",
            "Stay calm and focused",
            "Build up gradually",
        ),
        day_range=DayRange(29, 42),
    ),
    TaskTemplate(
        category=const.CATEGORY_SHOWER,
        title="Master cold therapy",
        description="Practice advanced cold exposure techniques",
        difficulty=const.DIFFICULTY_HARD,
        estimated_time=20,
        tips=(
            "Combine with breathing exercises",
            "Listen to your body",
            "Track your progress",
        ),
        day_range=DayRange(43, 66),
    ),
)


def templates_for_day(
    day: int, templates: tuple[TaskTemplate, ...] = TASK_TEMPLATES
) -> tuple[TaskTemplate, ...]:
    """Return the templates active on a program day in catalog order."""
    return tuple(template for template in templates if template.day_range.contains(day))
