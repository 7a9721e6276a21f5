"""Front ends that drive a ``ViewerSession``."""
