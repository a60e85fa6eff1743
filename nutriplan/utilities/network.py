"""Network helper for the Nutriplan launcher.

Returns a usable local (LAN) IP address so `nutriplan.main` can print a URL that
other devices on the same network can open.
"""
import socket


def get_local_ip() -> str:
    """Return a non-loopback local IP address if possible, otherwise '127.0.0.1'.

    A UDP socket asks the OS which interface would be used to reach a public IP;
    no data is sent.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip
