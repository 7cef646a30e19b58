from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from events.models import Event
from teams.models import Team, TeamRequest


class SeedDataCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_data", stdout=StringIO())
        call_command("seed_data", stdout=StringIO())

        self.assertEqual(Event.objects.count(), 2)
        team = Team.objects.get(name="Null Pointers")
        self.assertEqual(team.event.name, "Build for Good Hackathon")
        self.assertEqual(
            TeamRequest.objects.filter(team=team, status=TeamRequest.STATUS_PENDING).count(), 2
        )
