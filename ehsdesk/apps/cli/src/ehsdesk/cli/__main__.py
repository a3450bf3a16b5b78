"""python -m ehsdesk.cli"""

from .main import main

main()
