"""HTTP gateway between the session client and the remote dialogue service."""
