"""Packet base classes and packet definitions for the handshake, status and play states."""