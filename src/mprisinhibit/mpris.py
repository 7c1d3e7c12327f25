# mprisinhibit.mpris - MPRIS D-Bus client
# Lists the media players on the session bus, reads their playback
# status, and turns their D-Bus signals into a stream of events.

import collections

import dbus
import dbus.exceptions
from dbus.mainloop.glib import DBusGMainLoop
from gi.repository import GLib

import mprisinhibit.logging
from mprisinhibit.players import NO_ACTIVE_PLAYER, Event, MprisError, PlaybackStatus

log = mprisinhibit.logging.log.getChild('mpris')

BUS_NAME_PREFIX = 'org.mpris.MediaPlayer2.'
OBJECT_PATH = '/org/mpris/MediaPlayer2'
ROOT_INTERFACE = 'org.mpris.MediaPlayer2'
PLAYER_INTERFACE = 'org.mpris.MediaPlayer2.Player'
PROPERTIES_INTERFACE = 'org.freedesktop.DBus.Properties'

# Emitted by libdbus itself when the bus connection is lost.
LOCAL_INTERFACE = 'org.freedesktop.DBus.Local'
LOCAL_PATH = '/org/freedesktop/DBus/Local'

# The name we asked about has no owner (any more).
VANISHED_ERRORS = frozenset((
	'org.freedesktop.DBus.Error.ServiceUnknown',
	'org.freedesktop.DBus.Error.NameHasNoOwner',
))

STATUS_EVENTS = {
	PlaybackStatus.PLAYING: Event.PLAYING,
	PlaybackStatus.PAUSED: Event.PAUSED,
	PlaybackStatus.STOPPED: Event.STOPPED,
}

# Other player properties whose change we report.
PROPERTY_EVENTS = {
	'LoopStatus': Event.LOOPING_CHANGED,
	'Shuffle': Event.SHUFFLE_TOGGLED,
	'Volume': Event.VOLUME_CHANGED,
	'Rate': Event.PLAYBACK_RATE_CHANGED,
	'Metadata': Event.TRACK_CHANGED,
}

def wrap_error(e):
	return MprisError(str(e.get_dbus_message()), e.get_dbus_name())

# Translate the arguments of a PropertiesChanged signal into events.
def translate_properties(interface, changed):
	if interface != PLAYER_INTERFACE:
		return []
	events = []
	for key, value in changed.items():
		if key == 'PlaybackStatus':
			event = STATUS_EVENTS.get(PlaybackStatus.parse(str(value)))
		else:
			event = PROPERTY_EVENTS.get(key)
		if event is not None:
			events.append(event)
	return events


class Player:
	def __init__(self, bus, bus_name):
		self.bus = bus
		self.bus_name = bus_name
		try:
			self.proxy = bus.get_object(bus_name, OBJECT_PATH, introspect=False)
		except dbus.exceptions.DBusException as e:
			raise wrap_error(e) from e
		self.identity = str(self.get_property(ROOT_INTERFACE, 'Identity'))

	def __str__(self):
		return '%s (%s)' % (self.identity, self.bus_name)

	def get_property(self, interface, name):
		try:
			return self.proxy.Get(interface, name, dbus_interface=PROPERTIES_INTERFACE)
		except dbus.exceptions.DBusException as e:
			raise wrap_error(e) from e

	def get_playback_status(self):
		return PlaybackStatus.parse(str(self.get_property(PLAYER_INTERFACE, 'PlaybackStatus')))

	def events(self):
		'''Generator of Event values, blocking until the player emits
		something.  Ends after PLAYER_SHUT_DOWN; raises MprisError if
		the bus connection is lost.'''

		# Filled from the signal handlers, which run from inside
		# GLib main context iterations below.
		queue = collections.deque()

		def properties_changed(interface, changed, _invalidated):
			queue.extend(translate_properties(interface, changed))

		def seeked(_position):
			queue.append(Event.SEEKED)

		def disconnected():
			queue.append(MprisError('Lost connection to the D-Bus session bus'))

		def owner_changed(new_owner):
			if not new_owner:
				queue.append(Event.PLAYER_SHUT_DOWN)

		matches = []
		owner_watch = None
		try:
			try:
				matches.append(self.bus.add_signal_receiver(
					properties_changed,
					signal_name='PropertiesChanged',
					dbus_interface=PROPERTIES_INTERFACE,
					bus_name=self.bus_name,
					path=OBJECT_PATH,
				))
				matches.append(self.bus.add_signal_receiver(
					seeked,
					signal_name='Seeked',
					dbus_interface=PLAYER_INTERFACE,
					bus_name=self.bus_name,
					path=OBJECT_PATH,
				))
				matches.append(self.bus.add_signal_receiver(
					disconnected,
					signal_name='Disconnected',
					dbus_interface=LOCAL_INTERFACE,
					path=LOCAL_PATH,
				))
				owner_watch = self.bus.watch_name_owner(self.bus_name, owner_changed)
			except dbus.exceptions.DBusException as e:
				raise wrap_error(e) from e

			# The player may have stopped between being found and us
			# subscribing to its signals.
			status = self.get_playback_status()
			if status is not PlaybackStatus.PLAYING and status in STATUS_EVENTS:
				yield STATUS_EVENTS[status]

			context = GLib.MainContext.default()
			while True:
				while not queue:
					context.iteration(True)
				item = queue.popleft()
				if isinstance(item, MprisError):
					raise item
				yield item
				if item is Event.PLAYER_SHUT_DOWN:
					return
		finally:
			if owner_watch is not None:
				owner_watch.cancel()
			for match in matches:
				match.remove()


class PlayerFinder:
	def __init__(self, bus):
		self.bus = bus

	@classmethod
	def connect(cls):
		try:
			bus = dbus.SessionBus(mainloop=DBusGMainLoop())
		except dbus.exceptions.DBusException as e:
			raise MprisError('Could not connect to the D-Bus session bus: %s' % e.get_dbus_message(),
							 e.get_dbus_name()) from e
		# Report a lost bus as an event stream error instead.
		bus.set_exit_on_disconnect(False)
		return cls(bus)

	# Return a Player for every MPRIS name on the bus, in bus order.
	def find_all(self):
		try:
			names = self.bus.list_names()
		except dbus.exceptions.DBusException as e:
			raise wrap_error(e) from e

		players = []
		for name in names:
			if not name.startswith(BUS_NAME_PREFIX):
				continue
			try:
				players.append(Player(self.bus, str(name)))
			except MprisError as e:
				# Discovery turns this one into "no player".
				if e.message == NO_ACTIVE_PLAYER:
					raise
				if e.name in VANISHED_ERRORS:
					log.debug('%s went away while listing players.', name)
				else:
					log.warning('Skipping %s: %s', name, e)
		return players
