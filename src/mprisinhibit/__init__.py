# mprisinhibit.__init__ - core definitions and entry point
# Keeps a Wayland session from going idle while an MPRIS media
# player is playing.

import sys

# -----------------------------------------------------------------------------
# Exceptions

# Represents an expected failure mode, which is unlikely to be due to
# a bug in mprisinhibit (no D-Bus session, no Wayland compositor, a
# compositor without idle inhibition support...).  In this case, we do
# not need to print an exception stack trace; just print the error
# message and quit.
class UserError(Exception):
	pass

# -----------------------------------------------------------------------------
# Import mprisinhibit modules
# Placed after the declarations above, so that they can be used by the
# imported modules.  The D-Bus and Wayland adapters are imported on
# demand in main(), as they need the native bindings.

import mprisinhibit.players
import mprisinhibit.inhibitor
import mprisinhibit.daemon
from mprisinhibit.logging import log

# -----------------------------------------------------------------------------
# Entry point

help_text = '''
Usage: mprisinhibit

Inhibits idle on the current Wayland session while an MPRIS media
player is playing.  Takes no arguments.

Environment:
  MPRISINHIBIT_VERBOSE     Log verbosity offset (-3..2, default 0).
  MPRISINHIBIT_LOG_FORMAT  Python logging format string.
'''

def main():
	args = sys.argv[1:]

	if args:
		sys.stderr.write(help_text)
		return 2

	try:
		import mprisinhibit.mpris
		import mprisinhibit.wayland

		finder = mprisinhibit.mpris.PlayerFinder.connect()
		session = mprisinhibit.wayland.connect()
		mprisinhibit.daemon.Coordinator(session, finder).run()

	except UserError as e:
		log.critical('Fatal error: %s', e)
		return 1
