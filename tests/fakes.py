# In-memory stand-ins for the D-Bus and Wayland adapters.

from mprisinhibit import UserError
from mprisinhibit.players import PlaybackStatus


class FakePlayer:
	def __init__(self, identity, status=PlaybackStatus.PLAYING, events=()):
		self.identity = identity
		# A PlaybackStatus, or an exception to raise.
		self.status = status
		# Event values, or exceptions to raise from the stream.
		self.event_items = list(events)
		self.consumed = 0
		self.events_closed = False

	def get_playback_status(self):
		if isinstance(self.status, Exception):
			raise self.status
		return self.status

	def events(self):
		try:
			for item in self.event_items:
				self.consumed += 1
				if isinstance(item, Exception):
					raise item
				yield item
		finally:
			self.events_closed = True


class FakeFinder:
	'''Returns the given results from successive find_all() calls;
	the last one repeats.  A result may be an exception to raise.'''

	def __init__(self, *results):
		self.results = list(results)
		self.calls = 0

	def find_all(self):
		self.calls += 1
		result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
		if isinstance(result, Exception):
			raise result
		return list(result)


class FakeInhibitor:
	def __init__(self, session, surface):
		self.session = session
		self.surface = surface

	def destroy(self):
		self.session.requests.append(('destroy', self))


class FakeManager:
	def __init__(self, session):
		self.session = session

	def create_inhibitor(self, surface):
		inhibitor = FakeInhibitor(self.session, surface)
		self.session.requests.append(('create', inhibitor))
		return inhibitor


class FakeSession:
	def __init__(self):
		self.surface = object()
		self.idle_inhibit_manager = FakeManager(self)
		self.requests = []
		self.roundtrips = 0
		self.fail_roundtrip = False

	def roundtrip(self):
		self.roundtrips += 1
		if self.fail_roundtrip:
			raise UserError('Wayland round-trip failed')

	def count(self, kind):
		return sum(1 for request, _ in self.requests if request == kind)
