# mprisinhibit.players - media player discovery and watching
# Finds a playing MPRIS player, and waits for it to stop playing.
# Works on anything shaped like mprisinhibit.mpris.PlayerFinder /
# Player, so it can run against fakes.

import enum

import mprisinhibit
import mprisinhibit.logging

log = mprisinhibit.logging.log.getChild('players')

# Error message playerctld replies with when it is running, but has
# no player to forward calls to.  This just means nothing is playing.
NO_ACTIVE_PLAYER = 'No player is being controlled by playerctld'

class PlaybackStatus(enum.Enum):
	PLAYING = 'Playing'
	PAUSED = 'Paused'
	STOPPED = 'Stopped'
	OTHER = None

	@classmethod
	def parse(cls, value):
		'''Map an MPRIS PlaybackStatus string to a member.  Values
		outside the MPRIS specification become OTHER.'''
		for status in cls:
			if status.value == value:
				return status
		return cls.OTHER


class Event(enum.Enum):
	PLAYING = 'playing'
	PAUSED = 'paused'
	STOPPED = 'stopped'
	LOOPING_CHANGED = 'looping-changed'
	SHUFFLE_TOGGLED = 'shuffle-toggled'
	VOLUME_CHANGED = 'volume-changed'
	PLAYBACK_RATE_CHANGED = 'playback-rate-changed'
	TRACK_CHANGED = 'track-changed'
	SEEKED = 'seeked'
	PLAYER_SHUT_DOWN = 'player-shut-down'

# Events after which nothing is playing on the watched player any more.
IDLE_EVENTS = frozenset((
	Event.PLAYER_SHUT_DOWN,
	Event.STOPPED,
	Event.PAUSED,
))


# A D-Bus call or read failed.  Discovery and the event watcher
# recover from this for a single player or stream; only when it
# escapes to main() (the bus itself is unusable) is it fatal.
class MprisError(mprisinhibit.UserError):
	def __init__(self, message, name=None):
		super().__init__(message)
		self.message = message
		# D-Bus error name, e.g. org.freedesktop.DBus.Error.ServiceUnknown
		self.name = name

	def __str__(self):
		return self.message


# Return the first player (in bus order) which is currently playing,
# or None.
def find_active_player(finder):
	try:
		players = finder.find_all()
	except MprisError as e:
		if e.message == NO_ACTIVE_PLAYER:
			log.trace('playerctld is not controlling any player.')
			return None
		raise

	for player in players:
		try:
			status = player.get_playback_status()
		except MprisError as e:
			# The player may have exited since it was listed.
			log.warning('Could not get playback status of %s: %s', player.identity, e)
			continue
		log.trace('%s is %s', player.identity, status.name)
		if status is PlaybackStatus.PLAYING:
			return player
	return None


# Block until the given player is no longer playing.
#
# Fails open: a broken or silently ending event stream also counts as
# "stopped playing", so that we never keep the session awake on behalf
# of a player we can no longer observe.  A transient D-Bus hiccup
# during playback will thus let the session idle until the next
# discovery cycle picks the player up again.
def wait_for_idle(player):
	events = player.events()
	try:
		for event in events:
			if event in IDLE_EVENTS:
				log.debug('%s: %s', player.identity, event.value)
				return
			log.trace('%s: ignoring %s', player.identity, event.value)
	except MprisError as e:
		log.warning('Error reading events from %s: %s', player.identity, e)
		return
	finally:
		events.close()
	log.debug('Event stream of %s ended.', player.identity)
