"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict


def get_user_identity(request_obj) -> Dict[str, str]:
    """Extract player identity information from a request (HTTP or Socket.IO)."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)
    }
