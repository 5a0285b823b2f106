"""A tiny UDP request/reply exchange with fixed-size datagrams."""

import socket
import sys

BUFFER_SIZE = 1000
SERVER_PORT = 10000
CLIENT_PORT = 20000


def _text(data):
    """Decode a datagram as a NUL-terminated string."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def open_socket(port):
    """Return a UDP socket bound to ``port`` on every local interface."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", port))
    except OSError:
        sock.close()
        raise
    return sock


def resolve_address(hostname, port):
    """Resolve ``hostname`` to an (IPv4 address, port) pair.

    A ``None`` hostname gives ``None``: an empty address.
    """
    if hostname is None:
        return None
    return socket.gethostbyname(hostname), port


def write_message(sock, address, message, size=BUFFER_SIZE):
    """Send ``message`` NUL-padded to exactly ``size`` bytes; return bytes sent."""
    data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    if len(data) >= size:
        raise ValueError(f"message of {len(data)} bytes does not fit in {size}")
    return sock.sendto(data.ljust(size, b"\0"), address)


def read_message(sock, size=BUFFER_SIZE):
    """Receive one datagram of at most ``size`` bytes; return (data, sender)."""
    return sock.recvfrom(size)


def serve(port=SERVER_PORT, limit=None, out=None):
    """Answer each message with "goodbye world"; stop after ``limit`` messages.

    Returns the number of messages handled.
    """
    served = 0
    with open_socket(port) as sock:
        while limit is None or served < limit:
            print("server:: waiting...", file=out)
            data, address = read_message(sock, BUFFER_SIZE)
            print(
                f"server:: read message [size:{len(data)} contents:({_text(data)})]",
                file=out,
            )
            if data:
                write_message(sock, address, "goodbye world", BUFFER_SIZE)
                print("server:: reply", file=out)
            served += 1
    return served


def request(host="localhost", server_port=SERVER_PORT, client_port=CLIENT_PORT,
            message="hello world", out=None):
    """Send ``message`` to the server and return the text of its reply."""
    with open_socket(client_port) as sock:
        address = resolve_address(host, server_port)
        print(f"client:: send message [{message}]", file=out)
        try:
            write_message(sock, address, message, BUFFER_SIZE)
        except OSError:
            print("client:: failed to send", file=out)
            raise
        print("client:: wait for reply...", file=out)
        data, _ = read_message(sock, BUFFER_SIZE)
        reply = _text(data)
        print(f"client:: got reply [size:{len(data)} contents:({reply})", file=out)
    return reply


def server_main(argv=None):
    try:
        serve(SERVER_PORT)
    except OSError as exc:
        print(f"server:: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv=None):
    try:
        request()
    except OSError:
        return 1
    return 0