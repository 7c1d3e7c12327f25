# mprisinhibit.wayland - Wayland compositor connection
# Connects to the compositor, binds wl_compositor and
# zwp_idle_inhibit_manager_v1, and creates the surface that idle
# inhibitors are attached to.  The surface is never committed, so it
# never becomes visible.

from pywayland.client import Display
from pywayland.protocol.idle_inhibit_unstable_v1 import ZwpIdleInhibitManagerV1
from pywayland.protocol.wayland import WlCompositor

import mprisinhibit
import mprisinhibit.logging

log = mprisinhibit.logging.log.getChild('wayland')

# The compositor is unusable for us: not running, does not support
# idle inhibition, or rejected one of our requests.
class CompositorError(mprisinhibit.UserError):
	pass


class CompositorSession:
	def __init__(self, display):
		self.display = display
		self.registry = None

		# Bound globals, keyed by registry name.
		self.globals = {}

		self.compositor = None
		self.surface = None
		self.idle_inhibit_manager = None

		# Registry events we act upon; everything else is ignored.
		self.binders = {
			WlCompositor.name: self.bind_compositor,
			ZwpIdleInhibitManagerV1.name: self.bind_idle_inhibit_manager,
		}

	# Wait for the compositor to process all requests sent so far.
	def roundtrip(self):
		if self.display.roundtrip() < 0:
			raise CompositorError('Wayland round-trip failed')

	def bind_compositor(self, name, version):
		self.compositor = self.registry.bind(name, WlCompositor, min(version, WlCompositor.version))
		self.surface = self.compositor.create_surface()

	def bind_idle_inhibit_manager(self, name, version):
		self.idle_inhibit_manager = self.registry.bind(
			name, ZwpIdleInhibitManagerV1, min(version, ZwpIdleInhibitManagerV1.version))

	def handle_global(self, _registry, name, interface, version):
		binder = self.binders.get(interface)
		if binder is None:
			return
		log.info('[%d] %s (v%d)', name, interface, version)
		binder(name, version)
		self.globals[name] = interface

	def handle_global_remove(self, _registry, name):
		if name in self.globals:
			log.warning('Compositor removed %s, which we are using.', self.globals.pop(name))


def connect():
	'''Connect to the Wayland compositor of the current session,
	and return a CompositorSession with both globals bound.'''
	display = Display()
	try:
		display.connect()
	except ValueError as e:
		raise CompositorError('Could not connect to the Wayland compositor (%s). Is WAYLAND_DISPLAY set?' % e) from e

	session = CompositorSession(display)
	session.registry = display.get_registry()
	session.registry.dispatcher['global'] = session.handle_global
	session.registry.dispatcher['global_remove'] = session.handle_global_remove

	# First round-trip receives the globals and sends our binds,
	# the second confirms the compositor accepted them.
	session.roundtrip()
	session.roundtrip()

	if session.surface is None:
		raise CompositorError('Compositor does not provide %s.' % WlCompositor.name)
	if session.idle_inhibit_manager is None:
		raise CompositorError('Compositor does not support idle inhibition (%s).' % ZwpIdleInhibitManagerV1.name)

	return session
