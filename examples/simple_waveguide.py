import logging

import matplotlib.pyplot as plt
import jax.numpy as jnp

import wavegeom as wg

logging.basicConfig(level=logging.DEBUG)


# 1. Define the properties of the waveguide
width = 0.5
height = 0.22
n_clad = 1.45 # SiO2 substrate
n_wg = 3.44   # Si waveguide

# 2. Define the simulation window size
Lx = 5 * width
Lz = 5 * height
Ly = 4.0
dL = 10e-3

# 3. Define the geometry, with a finer grid required at the waveguide faces
waveguide = wg.Box(
    [[-width / 2, width / 2], [-Ly / 2, Ly / 2], [-height / 2, height / 2]],
    max_spacing=dL,
    boundary_spacing=[[dL / 2, dL / 2], [dL, dL], [dL / 4, dL / 4]],
)
core = wg.CircularCylinder(wg.Axis.Y, [0.0, 0.0, 0.0], radius=0.05, height=Ly)
print(waveguide, "requires grid spacings of", wg.finest_spacing([waveguide, core]))

# 4. Rasterize on a uniform grid
Nx, Ny, Nz = [int(Ll // dL) for Ll in (Lx, Ly, Lz)]
grid = wg.Grid(
    *[dL * jnp.ones((n, 2)) for n in (Nx, Ny, Nz)],
    origin=(-Lx / 2, -Ly / 2, -Lz / 2),
)
eps = wg.rasterize(
    [waveguide, core],
    [n_wg ** 2, 1.0],
    grid,
    background=n_clad ** 2,
)

# 5. Plot the xz cross-section of each component, where the sample points of
# each component are offset by half a cell along its own axis
fig, axes = plt.subplots(1, len(wg.Axis), sharey=True)
for ax, w in zip(axes, wg.Axis):
    points = wg.grids.component_points(grid, w).reshape(grid.shape + (3,))
    section = points[:, Ny // 2, :, :]
    ax.pcolormesh(section[..., 0], section[..., 2], eps[w.value, :, Ny // 2, :], cmap="Greys")
    ax.set_title(f"$\\epsilon_{w}$")
    ax.set_xlabel("x [$um$]")
axes[0].set_ylabel("z [$um$]")
fig.tight_layout()
plt.savefig("permittivity.png")
plt.close()
