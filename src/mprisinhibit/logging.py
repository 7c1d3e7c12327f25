# mprisinhibit.logging - logging implementation

import logging
import os

# Severity level for per-event chatter, below DEBUG
TRACE = logging.DEBUG - 5

logging.addLevelName(TRACE, 'TRACE')

# Define a class which implements the extra severity level as a method
class Logger(logging.getLoggerClass()):
	def trace(self, *args, **kwargs):
		self.log(TRACE, *args, **kwargs)

logging.setLoggerClass(Logger)

levels = [
	logging.CRITICAL,
	logging.ERROR,
	logging.WARNING,
	logging.INFO,
	logging.DEBUG,
	TRACE,
]

def get_level(verbose):
	index = 3 + verbose
	return levels[max(0, min(index, len(levels) - 1))]

logging.basicConfig(
	format=os.getenv('MPRISINHIBIT_LOG_FORMAT', '%(name)s: %(message)s'),
	level=get_level(int(os.getenv('MPRISINHIBIT_VERBOSE', '0'))),
)
log = logging.getLogger('mprisinhibit')
