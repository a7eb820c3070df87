import json
import logging
from pathlib import Path

import hydra
from omegaconf import DictConfig, OmegaConf

from spatial_wireframe import (
    OrientedBox3D,
    ProjectionOptions,
    ProjectionResult,
    fit_viewport,
    project_boxes,
)

# A logger for this file
log = logging.getLogger(__name__)


def _boxes_from_cfg(cfg: DictConfig) -> list[OrientedBox3D]:
    boxes_cfg = cfg.get("boxes", None)
    if not boxes_cfg:
        return []
    return [OrientedBox3D.from_dict(d) for d in OmegaConf.to_container(boxes_cfg, resolve=True)]


def _options_from_cfg(cfg: DictConfig) -> ProjectionOptions:
    opts = cfg.get("options", {}) or {}
    return ProjectionOptions(
        clip_behind_camera=bool(opts.get("clip_behind_camera", False)),
        normalize_orientation=bool(opts.get("normalize_orientation", False)),
    )


def _save_result(result: ProjectionResult, output_path: Path):
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
    log.info(f"Saved {len(result.edges)} edges and {len(result.labels)} labels to {output_path}")


def run(cfg: DictConfig) -> ProjectionResult:
    viewport = fit_viewport(
        (cfg.media.width, cfg.media.height),
        (cfg.container.width, cfg.container.height),
    )
    if viewport is None:
        log.warning("Container or media has no area, nothing to project")
        return ProjectionResult()

    boxes = _boxes_from_cfg(cfg)
    log.info(
        f"Projecting {len(boxes)} boxes into a {viewport.width:.1f}x{viewport.height:.1f} viewport "
        f"(fov {cfg.fov_deg} deg)"
    )
    result = project_boxes(boxes, viewport, cfg.fov_deg, _options_from_cfg(cfg))

    for label in result.labels:
        log.info(f"  {label.text!r} at ({label.pos[0]:.1f}, {label.pos[1]:.1f})")
    if result.skipped:
        log.info(f"Skipped {len(result.skipped)} boxes behind the camera: {list(result.skipped)}")

    if cfg.get("output_path"):
        _save_result(result, Path(cfg.output_path))
    return result


@hydra.main(version_base=None, config_path="conf", config_name="project_boxes")
def main(cfg: DictConfig):
    run(cfg)


if __name__ == "__main__":
    main()
