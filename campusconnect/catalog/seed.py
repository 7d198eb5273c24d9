"""Sample catalog used in development.

Dates are relative to the moment the catalog is built, so the sample always
has featured, current and upcoming events.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..models import Announcement, Event, EventCategory
from ..utils.timezone import now_utc


def sample_events(now: Optional[datetime] = None) -> List[Event]:
    now = now or now_utc()
    days = lambda n: now + timedelta(days=n)  # noqa: E731
    return [
        Event(
            id='1',
            title='Annual Tech Hackathon',
            description='Join us for a 24-hour coding challenge to build innovative solutions for campus problems.',
            date=days(7),
            location='Engineering Building, Room 301',
            category=EventCategory.HACKATHON,
            organizer='Computer Science Department',
            image='https://images.unsplash.com/photo-1515187029135-18ee286d815b',
            registration_deadline=days(5),
            max_attendees=100,
            current_attendees=42,
            is_featured=True,
        ),
        Event(
            id='2',
            title='Spring Career Fair',
            description='Connect with over 50 employers looking to hire interns and graduates.',
            date=days(14),
            location='Student Union Hall',
            category=EventCategory.FAIR,
            organizer='Career Services',
            image='https://images.unsplash.com/photo-1521737604893-d14cc237f11d',
            registration_deadline=days(10),
            max_attendees=500,
            current_attendees=123,
            is_featured=True,
        ),
        Event(
            id='3',
            title='AI Workshop Series',
            description='Learn the fundamentals of artificial intelligence in this hands-on workshop series.',
            date=days(3),
            end_date=days(10),
            location='Virtual',
            category=EventCategory.WORKSHOP,
            organizer='AI Research Lab',
            image='https://images.unsplash.com/photo-1531482615713-2afd69097998',
            registration_deadline=days(2),
            max_attendees=200,
            current_attendees=98,
        ),
        Event(
            id='4',
            title='Campus Music Festival',
            description='A celebration of student musical talent featuring live performances across genres.',
            date=days(21),
            location='Campus Amphitheater',
            category=EventCategory.CULTURAL,
            organizer='Student Activities Board',
            image='https://images.unsplash.com/photo-1501386761578-eac5c94b800a',
            registration_deadline=days(18),
            max_attendees=1000,
            current_attendees=210,
            is_featured=True,
        ),
        Event(
            id='5',
            title='Research Symposium',
            description='Undergraduate and graduate students present their research projects.',
            date=now,
            location='Science Center, Main Hall',
            category=EventCategory.CONFERENCE,
            organizer='Office of Research',
            image='https://images.unsplash.com/photo-1523580494863-6f3031224c94',
            max_attendees=300,
            current_attendees=275,
        ),
    ]


def sample_announcements(now: Optional[datetime] = None) -> List[Announcement]:
    now = now or now_utc()
    return [
        Announcement(
            id='1',
            title='Campus Wi-Fi Upgrade',
            content='The campus Wi-Fi network will be upgraded this weekend. Expect intermittent connectivity.',
            date=now - timedelta(days=1),
            author='IT Services',
            important=True,
        ),
        Announcement(
            id='2',
            title='Library Extended Hours',
            content='The library will be open 24/7 during finals week to accommodate student study needs.',
            date=now - timedelta(days=2),
            author='University Library',
        ),
        Announcement(
            id='3',
            title='New Course Registration',
            content='Course registration for the Fall semester opens next Monday at 8 AM.',
            date=now - timedelta(days=3),
            author="Registrar's Office",
            important=True,
        ),
    ]


def sample_catalog(now: Optional[datetime] = None) -> Tuple[List[Event], List[Announcement]]:
    return sample_events(now), sample_announcements(now)
