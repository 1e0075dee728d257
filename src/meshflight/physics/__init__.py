"""Physics: vector math, hull mesh, body frame, aerodynamics and integration."""
