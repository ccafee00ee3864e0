from playpulse.models.user import User, Coach
from playpulse.models.institute import Institute
from playpulse.models.program import Program, ProgramCoach
from playpulse.models.enrollment import Enrollment
from playpulse.models.attendance import Attendance, Progress
from playpulse.models.schedule import ProgramSchedule
from playpulse.models.gamification import Gamification
from playpulse.models.notification import Notification
from playpulse.models.chat import ChatMessage
from playpulse.models.material import TrainingMaterial
from playpulse.models.review import Review
from playpulse.models.event import Event, EventEnrollment

__all__ = [
    "User", "Coach",
    "Institute",
    "Program", "ProgramCoach",
    "Enrollment",
    "Attendance", "Progress",
    "ProgramSchedule",
    "Gamification",
    "Notification",
    "ChatMessage",
    "TrainingMaterial",
    "Review",
    "Event", "EventEnrollment",
]
