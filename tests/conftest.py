import jax

# Geometry tests compare against exact boundary values.
jax.config.update("jax_enable_x64", True)
