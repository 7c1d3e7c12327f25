import io
import unittest
from unittest import mock

from fakes import FakeFinder, FakePlayer, FakeSession
from mprisinhibit.daemon import POLL_INTERVAL, Coordinator
from mprisinhibit.inhibitor import InhibitionState
from mprisinhibit.players import Event, MprisError, PlaybackStatus


class CoordinatorTests(unittest.TestCase):
	def setUp(self):
		self.session = FakeSession()
		self.sleep = mock.Mock()
		patcher = mock.patch('sys.stdout', new_callable=io.StringIO)
		self.stdout = patcher.start()
		self.addCleanup(patcher.stop)

	def coordinator(self, *results):
		return Coordinator(self.session, FakeFinder(*results), sleep=self.sleep)

	def test_idle_cycle_sleeps(self):
		coordinator = self.coordinator([])

		coordinator.step()

		self.sleep.assert_called_once_with(POLL_INTERVAL)
		self.assertEqual(self.session.requests, [])
		self.assertEqual(self.stdout.getvalue(), '')

	def test_playback_round_trip(self):
		x = FakePlayer('X', events=[Event.VOLUME_CHANGED, Event.PAUSED])
		coordinator = self.coordinator([x], [], [])

		coordinator.step()
		self.assertIs(coordinator.controller.state, InhibitionState.INHIBITING)
		self.assertEqual(self.session.count('create'), 1)
		self.assertIs(self.session.requests[0][1].surface, self.session.surface)
		self.assertTrue(x.events_closed)
		self.sleep.assert_not_called()

		coordinator.step()
		self.assertIs(coordinator.controller.state, InhibitionState.IDLE)
		self.assertIsNone(coordinator.controller.inhibitor)
		self.assertEqual(self.session.count('destroy'), 1)
		self.sleep.assert_called_once_with(POLL_INTERVAL)

		coordinator.step()
		self.assertIs(coordinator.controller.state, InhibitionState.IDLE)
		self.assertEqual(self.session.count('destroy'), 1)
		self.assertEqual(self.sleep.call_count, 2)

		self.assertEqual(self.stdout.getvalue(), 'Idle inhibited by X\nIdle allowed\n')

	def test_handover_between_players_keeps_inhibitor(self):
		x = FakePlayer('X', events=[Event.STOPPED])
		y = FakePlayer('Y', events=[Event.PLAYER_SHUT_DOWN])
		coordinator = self.coordinator([x], [y], [])

		coordinator.step()
		inhibitor = coordinator.controller.inhibitor
		coordinator.step()

		self.assertIs(coordinator.controller.inhibitor, inhibitor)
		self.assertEqual(self.session.count('create'), 1)
		self.assertEqual(self.session.count('destroy'), 0)
		self.sleep.assert_not_called()
		self.assertEqual(self.stdout.getvalue(), 'Idle inhibited by X\nIdle inhibited by Y\n')

	def test_broken_watch_releases_on_next_cycle(self):
		x = FakePlayer('X', events=[MprisError('Lost connection to the D-Bus session bus')])
		gone = FakePlayer('X', status=MprisError('Player went away'))
		coordinator = self.coordinator([x], [gone])

		with self.assertLogs('mprisinhibit.players', level='WARNING'):
			coordinator.step()
			coordinator.step()

		self.assertIs(coordinator.controller.state, InhibitionState.IDLE)
		self.assertEqual(self.session.count('destroy'), 1)

	def test_paused_player_does_not_inhibit(self):
		coordinator = self.coordinator([FakePlayer('X', PlaybackStatus.PAUSED)])

		coordinator.step()

		self.assertEqual(self.session.requests, [])
		self.sleep.assert_called_once_with(POLL_INTERVAL)

	def test_discovery_failure_propagates(self):
		coordinator = self.coordinator(MprisError('Connection is closed'))

		with self.assertRaises(MprisError):
			coordinator.step()
		self.sleep.assert_not_called()
