#!/usr/bin/env python3
"""
Demo script for the Kondate step scheduler.
Schedules a three-dish dinner and shows how conflicts, dish labels and a
dangling dependency shape the timeline.
"""
from kondate.engine.scheduling import KeywordConflictClassifier, TimelineRepairEngine, validate_steps
from kondate.engine.step_scheduler import StepScheduler
from kondate.engine.timeline import render_timeline


DINNER = [
    {"id": 1, "title": "Wash rice", "description": "Rinse the rice until clear",
     "duration": 5, "canParallel": False, "category": "prep", "dishLabel": "A"},
    {"id": 2, "title": "Cook rice", "description": "Cook the rice in the rice cooker",
     "duration": 40, "dependencies": [1], "canParallel": True, "category": "wait", "dishLabel": "A"},
    {"id": 3, "title": "Cut vegetables", "description": "Slice the onion and carrot",
     "duration": 8, "canParallel": False, "category": "prep", "dishLabel": "B"},
    {"id": 4, "title": "Brown pork", "description": "Fry pork in a pan",
     "duration": 6, "dependencies": [3], "canParallel": False, "category": "cook", "dishLabel": "B"},
    {"id": 5, "title": "Simmer curry", "description": "Simmer onion, carrot and pork in a pot",
     "duration": 20, "dependencies": [4], "canParallel": True, "category": "wait", "dishLabel": "B"},
    {"id": 6, "title": "Miso soup", "description": "Boil tofu in a pot and dissolve miso",
     "duration": 10, "dependencies": [1], "canParallel": True, "category": "cook", "dishLabel": "C"},
    {"id": 7, "title": "Plate", "description": "Plate rice and curry",
     "duration": 3, "dependencies": [2, 5, 6, 99], "canParallel": False, "category": "serve"},
]


def print_section(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def main():
    """Run scheduler demonstration."""
    print_section("Kondate Step Scheduler Demo")

    classifier = KeywordConflictClassifier()
    scheduler = StepScheduler(classifier=classifier)

    print_section("STEP 1: Conflicting pairs")
    by_id = {step["id"]: step for step in DINNER}
    pairs = TimelineRepairEngine(classifier=classifier).conflicting_pairs(validate_steps(DINNER))
    for first_id, second_id in pairs:
        print(f"  {by_id[first_id]['title']:16} x {by_id[second_id]['title']}")

    print_section("STEP 2: Scheduled timeline")
    schedule = scheduler.schedule(DINNER)
    print(render_timeline(schedule))

    if schedule.advisories:
        print("\nAdvisories:")
        for advisory in schedule.advisories:
            print(f"  ⚠ {advisory}")

    print_section("STEP 3: Step start times")
    for step in schedule.steps:
        print(f"  {step.id}. {step.title:16} {step.start_time:>3} -> {step.end_time:<3} min")

    print(f"\n✓ Dinner is ready in {schedule.optimized_time} minutes "
          f"({schedule.passes} repair pass(es))")


if __name__ == "__main__":
    main()
