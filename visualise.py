import matplotlib.pyplot as plt

import config


def plot_waypoints_3d(waypoints):
    """Plot waypoints in 3D (longitude, latitude, elevation)."""
    wps = list(waypoints.values())
    fig = plt.figure(figsize=(10, 8))
    ax = fig.add_subplot(111, projection="3d")

    xs = [w.lon for w in wps]
    ys = [w.lat for w in wps]
    zs = [w.elevation if w.elevation is not None else 0 for w in wps]

    ax.scatter(xs, ys, zs, c="r", marker="o", s=50)
    for w, x, y, z in zip(wps, xs, ys, zs):
        ax.text(x, y, z, w.name)

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_zlabel("Elevation (m)")
    ax.set_title("Waypoints in 3D")
    fig.tight_layout()
    return fig


def plot_route(result, waypoints, start=config.START_NAME, finish=config.FINISH_NAME):
    """Plot every waypoint and draw ``result``'s route over them."""
    fig, ax = plt.subplots(figsize=(10, 8))

    for w in waypoints.values():
        color = "tab:orange" if w.name in (start, finish) else "tab:blue"
        ax.scatter(w.lon, w.lat, c=color, s=30)
        ax.annotate(f"{w.name} ({w.points})", (w.lon, w.lat),
                    textcoords="offset points", xytext=(5, 5), fontsize=7)

    if result.path:
        route = [waypoints[name] for name in result.path]
        ax.plot([w.lon for w in route], [w.lat for w in route], "-", color="tab:green", linewidth=2)

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"{result.score} pts, {result.distance / 1000:.2f} km, {result.climb:.0f} m climb")
    fig.tight_layout()
    return fig


def show_result(result, waypoints):
    """Display the best route and the 3D waypoint field."""
    plot_route(result, waypoints)
    plot_waypoints_3d(waypoints)
    plt.show()
