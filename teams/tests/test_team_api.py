from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from events.models import Event
from teams.models import Team, TeamMember, TeamRequest, Message
from teams.services import TeamService, TeamRequestService

User = get_user_model()


class TeamApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

        # ---- Users ----
        self.leader = User.objects.create_user(
            username="leader", email="leader@vitstudent.ac.in", password="pass1234", name="Lena"
        )
        self.member = User.objects.create_user(
            username="member", email="member@vitstudent.ac.in", password="pass1234", name="Max"
        )
        self.applicant = User.objects.create_user(
            username="applicant", email="applicant@vitstudent.ac.in", password="pass1234", name="Ana"
        )
        self.outsider = User.objects.create_user(
            username="outsider", email="outsider@iitb.ac.in", password="pass1234"
        )

        # ---- Team ----
        self.team = TeamService.create_team(
            leader=self.leader,
            name="Null Pointers",
            category=Team.CATEGORY_HACKATHON,
            required_skills=["django", "react"],
        )
        TeamService.add_member(self.team, self.member)

        self.base_api = "/api/"

    def _team_url(self, suffix=""):
        return f"{self.base_api}teams/{self.team.id}/{suffix}"

    # -------------------------
    # Team browsing / creation
    # -------------------------
    def test_create_team_makes_caller_leader(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(
            f"{self.base_api}teams/",
            {"name": "Rustaceans", "category": "competition", "max_members": 3, "required_skills": ["rust"]},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        team = Team.objects.get(pk=resp.data["id"])
        self.assertEqual(team.leader, self.applicant)
        self.assertTrue(
            TeamMember.objects.filter(
                team=team, user=self.applicant, role=TeamMember.ROLE_LEADER, status=TeamMember.STATUS_APPROVED
            ).exists()
        )

    def test_create_team_bound_to_event_copies_event_name(self):
        now = timezone.now()
        event = Event.objects.create(
            name="Smart India Hackathon",
            start_date=now + timedelta(days=3),
            end_date=now + timedelta(days=4),
        )
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(
            f"{self.base_api}teams/", {"name": "SIH Squad", "event": str(event.id)}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertEqual(resp.data["event_name"], "Smart India Hackathon")

    def test_create_team_requires_name(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(f"{self.base_api}teams/", {"name": "   "}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", resp.data)

    def test_recommended_teams_exclude_joined(self):
        other = TeamService.create_team(leader=self.outsider, name="Other Team")
        self.client.force_authenticate(user=self.member)

        resp = self.client.get(f"{self.base_api}teams/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        ids = {row["id"] for row in resp.data}
        self.assertIn(str(other.id), ids)
        self.assertNotIn(str(self.team.id), ids)

    def test_teams_by_category(self):
        TeamService.create_team(leader=self.outsider, name="Paper Club", category=Team.CATEGORY_RESEARCH)
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.get(f"{self.base_api}teams/", {"category": "research"})

        self.assertEqual([row["name"] for row in resp.data], ["Paper Club"])

    def test_my_teams(self):
        self.client.force_authenticate(user=self.member)

        resp = self.client.get(f"{self.base_api}teams/my/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row["id"] for row in resp.data], [str(self.team.id)])

    def test_team_detail_lists_approved_members(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.get(self._team_url())

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        usernames = {m["username"] for m in resp.data["members"]}
        self.assertEqual(usernames, {"leader", "member"})
        self.assertEqual(resp.data["current_size"], 2)

    def test_unauthenticated_is_rejected(self):
        resp = self.client.get(f"{self.base_api}teams/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.data["success"])

    # -------------------------
    # Join requests
    # -------------------------
    def test_join_creates_pending_request(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(self._team_url("join/"), {"message": "I know ML"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["status"], TeamRequest.STATUS_PENDING)
        self.assertEqual(resp.data["message"], "I know ML")

    def test_join_twice_returns_conflict(self):
        self.client.force_authenticate(user=self.applicant)
        self.client.post(self._team_url("join/"), {"message": "one"}, format="json")

        resp = self.client.post(self._team_url("join/"), {"message": "two"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("already requested", resp.data["error"])

    def test_member_join_returns_conflict(self):
        self.client.force_authenticate(user=self.member)

        resp = self.client.post(self._team_url("join/"), {}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("already a member", resp.data["error"])
        self.assertFalse(TeamRequest.objects.filter(user=self.member).exists())

    def test_join_with_oversized_message_is_validation_error(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(self._team_url("join/"), {"message": "x" * 1001}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_join_unknown_team_is_not_found(self):
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.post(
            f"{self.base_api}teams/00000000-0000-0000-0000-000000000000/join/", {}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_leader_lists_pending_requests_with_snapshot(self):
        TeamRequestService.submit_join_request(self.team, self.applicant, "hey")
        self.client.force_authenticate(user=self.leader)

        resp = self.client.get(self._team_url("requests/"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]["user_snapshot"]["name"], "Ana")
        self.assertEqual(resp.data[0]["user_snapshot"]["email"], "applicant@vitstudent.ac.in")

    def test_non_leader_cannot_list_requests(self):
        self.client.force_authenticate(user=self.member)

        resp = self.client.get(self._team_url("requests/"))

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn("error", resp.data)

    def test_leader_clears_requests(self):
        TeamRequestService.submit_join_request(self.team, self.applicant, None)
        TeamRequestService.submit_join_request(self.team, self.outsider, None)
        self.client.force_authenticate(user=self.leader)

        resp = self.client.delete(self._team_url("requests/"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {"cleared": 2})
        follow_up = self.client.get(self._team_url("requests/"))
        self.assertEqual(follow_up.data, [])

    def test_non_leader_cannot_clear_requests(self):
        self.client.force_authenticate(user=self.member)

        resp = self.client.delete(self._team_url("requests/"))

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_my_pending_requests(self):
        TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.leader)

        resp = self.client.get(f"{self.base_api}teams/my/requests/pending/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row["user_id"] for row in resp.data], [self.applicant.id])

    # -------------------------
    # Decisions
    # -------------------------
    def test_leader_approves_request(self):
        team_request = TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.leader)

        resp = self.client.put(
            f"{self.base_api}team-requests/{team_request.id}/", {"status": "approved"}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["status"], "approved")
        self.assertTrue(self.team.has_member(self.applicant))

    def test_leader_rejects_request_then_resubmit_conflicts(self):
        team_request = TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.leader)
        resp = self.client.put(
            f"{self.base_api}team-requests/{team_request.id}/", {"status": "rejected"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(user=self.applicant)
        resp = self.client.post(self._team_url("join/"), {"message": "again"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("previously rejected", resp.data["error"])

    def test_invalid_decision_is_validation_error(self):
        team_request = TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.leader)

        resp = self.client.put(
            f"{self.base_api}team-requests/{team_request.id}/", {"status": "maybe"}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_deciding_twice_is_conflict(self):
        team_request = TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.leader)
        url = f"{self.base_api}team-requests/{team_request.id}/"
        self.client.put(url, {"status": "approved"}, format="json")

        resp = self.client.put(url, {"status": "approved"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(TeamMember.objects.filter(team=self.team, user=self.applicant).count(), 1)

    def test_non_leader_cannot_decide(self):
        team_request = TeamRequestService.submit_join_request(self.team, self.applicant, None)
        self.client.force_authenticate(user=self.member)

        resp = self.client.put(
            f"{self.base_api}team-requests/{team_request.id}/", {"status": "approved"}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    # -------------------------
    # Chat history
    # -------------------------
    def test_members_read_history_newest_first(self):
        now = timezone.now()
        for offset, text in ((3, "first"), (2, "second"), (1, "third")):
            message = Message.objects.create(team=self.team, user=self.member, content=text)
            Message.objects.filter(pk=message.pk).update(created_at=now - timedelta(minutes=offset))
        self.client.force_authenticate(user=self.leader)

        resp = self.client.get(self._team_url("messages/"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([m["content"] for m in resp.data], ["third", "second", "first"])
        self.assertEqual(resp.data[0]["sender"]["name"], "Max")

    def test_non_member_cannot_read_history(self):
        Message.objects.create(team=self.team, user=self.member, content="secret plans")
        self.client.force_authenticate(user=self.applicant)

        resp = self.client.get(self._team_url("messages/"))

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
