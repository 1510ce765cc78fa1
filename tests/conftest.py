"""Global test fixtures."""

import logfire

# Spans are recorded locally only; create_app expects logfire to be configured
logfire.configure(send_to_logfire=False, console=False)
