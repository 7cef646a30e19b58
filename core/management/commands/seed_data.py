from datetime import timedelta

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.utils import timezone

from events.models import Event
from teams.models import Team, TeamRequest
from teams.services import TeamService, TeamRequestService

User = get_user_model()

DEMO_DOMAIN = "vitstudent.ac.in"


class Command(BaseCommand):
    help = "Seeds the database with demo students, an institution, events, a team and join requests"

    def _user(self, username, **defaults):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@{DEMO_DOMAIN}", **defaults},
        )
        if created:
            user.set_password("password")
            user.save()
        return user

    def handle(self, *args, **options):
        self.stdout.write("Seeding data...")

        # 1. Users
        institution = self._user("events-cell", role=User.ROLE_INSTITUTION, name="VIT Events Cell")
        alice = self._user("alice", name="Alice", skills=["django", "postgres"], is_profile_complete=True)
        bob = self._user("bob", name="Bob", skills=["react", "figma"], is_profile_complete=True)
        carol = self._user("carol", name="Carol", skills=["pytorch"], is_profile_complete=True)

        # 2. Events (one open to all, one scoped to the demo domain)
        now = timezone.now()
        events_data = [
            {
                "name": "Build for Good Hackathon",
                "category": Event.CATEGORY_HACKATHON,
                "description": "48-hour coding marathon to solve social issues.",
                "start_date": now + timedelta(days=12),
                "end_date": now + timedelta(days=14),
                "registration_deadline": now + timedelta(days=10),
                "organizer": "Open Source Society",
                "domain": None,
            },
            {
                "name": "VIT Research Symposium",
                "category": Event.CATEGORY_SYMPOSIUM,
                "description": "Present your undergraduate research.",
                "start_date": now + timedelta(days=30),
                "end_date": now + timedelta(days=31),
                "organizer": institution.display_name,
                "domain": DEMO_DOMAIN,
            },
        ]
        events = []
        for data in events_data:
            event, created = Event.objects.get_or_create(
                name=data["name"],
                defaults={**data, "created_by": institution},
            )
            events.append(event)
            if created:
                self.stdout.write(f"Created event: {event.name}")

        # 3. Team with an inbox
        team = Team.objects.filter(name="Null Pointers", leader=alice).first()
        if team is None:
            team = TeamService.create_team(
                leader=alice,
                name="Null Pointers",
                description="Looking for a frontend dev and an ML person.",
                category=Team.CATEGORY_HACKATHON,
                event=events[0],
                required_skills=["react", "pytorch"],
            )
            self.stdout.write(f"Created team: {team.name}")

        for user, note in ((bob, "I can own the frontend."), (carol, "Happy to do the model.")):
            if not TeamRequest.objects.filter(team=team, user=user).exists():
                TeamRequestService.submit_join_request(team, user, note)

        self.stdout.write(self.style.SUCCESS("Seeding complete."))
