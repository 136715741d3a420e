from .publisher import TunnelPublisher, ngrok_connect, ngrok_disconnect

__all__ = ["TunnelPublisher", "ngrok_connect", "ngrok_disconnect"]
