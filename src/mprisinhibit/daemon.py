# mprisinhibit.daemon - main loop
# Alternates between looking for a playing player, updating the idle
# inhibitor, and waiting for the player to stop.

import sys
import time

import mprisinhibit.inhibitor
import mprisinhibit.players
from mprisinhibit.logging import log

# How long to sleep between looking for players, when none is playing.
# Idle timeouts are typically minutes long, so there is no point in
# looking more often.
POLL_INTERVAL = 5

# Print a status line for the user.
def status(message):
	sys.stdout.write(message + '\n')
	sys.stdout.flush()


class Coordinator:
	def __init__(self, session, finder, sleep=time.sleep):
		self.finder = finder
		self.controller = mprisinhibit.inhibitor.IdleInhibitorController(session)
		self.sleep = sleep

	# Run one discovery cycle.
	def step(self):
		player = mprisinhibit.players.find_active_player(self.finder)

		if player is not None:
			self.controller.ensure_inhibiting()
			status('Idle inhibited by %s' % player.identity)
			mprisinhibit.players.wait_for_idle(player)
			# Go look again right away: another player may still be
			# playing, in which case we keep the inhibitor.
			return

		if self.controller.ensure_idle():
			status('Idle allowed')
		self.sleep(POLL_INTERVAL)

	def run(self):
		log.debug('Starting main loop.')
		while True:
			self.step()
			log.trace('Controller %s', self.controller)
