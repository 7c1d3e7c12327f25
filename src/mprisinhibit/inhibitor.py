# mprisinhibit.inhibitor - idle inhibitor lifecycle
# Creates and destroys the (single) zwp_idle_inhibitor_v1 object.
# Whether we are inhibiting idle is exactly whether we are holding one.

import enum

import mprisinhibit.logging

log = mprisinhibit.logging.log.getChild('inhibitor')

class InhibitionState(enum.Enum):
	IDLE = 'idle'
	INHIBITING = 'inhibiting'


# Return an inhibitor for the session's surface, creating one only if
# none is held yet.
def ensure_inhibiting(session, inhibitor):
	if inhibitor is not None:
		return inhibitor
	inhibitor = session.idle_inhibit_manager.create_inhibitor(session.surface)
	session.roundtrip()
	log.debug('Created idle inhibitor.')
	return inhibitor

# Destroy the inhibitor, if any.  Always returns None, which is the
# new value to hold.
def ensure_idle(session, inhibitor):
	if inhibitor is None:
		return None
	inhibitor.destroy()
	session.roundtrip()
	log.debug('Destroyed idle inhibitor.')
	return None


class IdleInhibitorController:
	def __init__(self, session):
		self.session = session
		self.inhibitor = None

	@property
	def state(self):
		if self.inhibitor is None:
			return InhibitionState.IDLE
		return InhibitionState.INHIBITING

	# Both return True if the state changed.

	def ensure_inhibiting(self):
		previous = self.inhibitor
		self.inhibitor = ensure_inhibiting(self.session, self.inhibitor)
		return previous is None

	def ensure_idle(self):
		previous = self.inhibitor
		# The destroy request is sent even if the round-trip fails.
		self.inhibitor = None
		ensure_idle(self.session, previous)
		return previous is not None

	def __str__(self):
		return 'state: %s' % self.state.value
