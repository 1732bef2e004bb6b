"""Shared test fixtures for trace_journal."""

import os
import tempfile
from datetime import date

import pytest

from trace_journal.journal.models import (
    CreativityLearning,
    DailyCheckIn,
    Interaction,
    JournalEntry,
    MediaItem,
    Meeting,
    PersonalGrowth,
    Social,
    Wellbeing,
    WorkCareer,
    WorkItem,
)


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file pointing at a journal folder."""
    import yaml

    config_data = {
        "journal": {"root": os.path.join(tmp_dir, "journal")},
        "codec": {"policy": "lenient"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def sample_entry():
    """An entry with every section and sub-record list populated."""
    return JournalEntry(
        date=date(2024, 3, 1),
        daily_check_in=DailyCheckIn(
            mood="Calm, a little tired",
            highlight="Long walk by the river",
            overview="Slow start.\nProductive afternoon.",
        ),
        personal_growth=PersonalGrowth(
            reflections="Noticed I rush decisions when tired.",
            achievements="Finished the draft",
            challenges="Staying off my phone",
            goals="Sleep by 11",
        ),
        wellbeing=Wellbeing(energy_level=7, physical_activity="Ran 5k", mental_health="Steady"),
        creativity_learning=CreativityLearning(
            ideas="A tiny app for plant watering",
            learning_log="Read about B-trees",
            books_media=[
                MediaItem(title="Dune", creator="Frank Herbert", status="Reading", notes="Slow middle"),
                MediaItem(title="Arrival", creator="Denis Villeneuve", status="Watched", notes="Loved it"),
            ],
            projects="Garden planner",
        ),
        social=Social(
            meaningful_interactions=[
                Interaction(person="Sam", notes="Coffee and catch-up"),
                Interaction(person="Mum", notes="Phone call"),
            ],
            relationship_updates="Planning a visit in April",
            social_events="Board games on Friday",
        ),
        work_career=WorkCareer(
            work_items=[
                WorkItem(title="Fix bug", status="In Progress", priority="High", description="Null check in parser"),
                WorkItem(title="Write docs", status="Todo", priority="Low", description="Cover the CLI"),
            ],
            meetings=[
                Meeting(title="Standup", attendees="Team", notes="Short", action_items="Review PR"),
                Meeting(title="1:1", attendees="Alex", notes="Career chat", action_items="Draft goals"),
            ],
            challenges="Flaky CI",
            wins="Shipped the release",
            work_ideas="Cache the build",
        ),
    )
