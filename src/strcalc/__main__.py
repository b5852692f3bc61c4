from sys import exit

from .cli import CLI


exit(CLI().run())
