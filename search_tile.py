"""在截图中搜索图块，打印协议字符串并输出标注图"""
import sys
sys.path.insert(0, "src")
import cv2
from imgloc.modules.export import parse_polygon, parse_search_area, search_tile
from imgloc.modules.vision import find_all_templates


def run(img_path, tpl_path, similarity=0.9, area=None, points=None):
    img = cv2.imread(img_path)
    if img is None:
        print(f"ERROR: cannot load {img_path}")
        return

    print(f"协议输出: {search_tile(img, tpl_path, similarity, area, points)}")

    zone = parse_search_area(area)
    polygon = parse_polygon(points)
    matches = find_all_templates(img, tpl_path, threshold=similarity, search_zone=zone, polygon=polygon)
    print(f"模板: {tpl_path}  阈值: {similarity}  匹配: {len(matches)} 个")
    for i, m in enumerate(matches):
        print(f"  [{i}] pos=({m.x}, {m.y}) size=({m.w}x{m.h}) center={m.center} score={m.similarity:.4f}")

    # 在调试图上标注搜索区域、多边形和匹配
    debug = img.copy()
    cv2.rectangle(debug, (zone.x, zone.y), (zone.right, zone.bottom), (255, 128, 0), 1)
    pts = [(int(x), int(y)) for x, y in polygon.points]
    for a, b in zip(pts, pts[1:] + pts[:1]):
        cv2.line(debug, a, b, (0, 255, 0), 1)
    for m in matches:
        cv2.rectangle(debug, (m.x, m.y), (m.x + m.w, m.y + m.h), (0, 255, 255), 2)
        cv2.putText(debug, f"{m.similarity:.2f}", (m.x, m.y - 5),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4, (0, 255, 255), 1)
    out = "search_tile_debug.png"
    cv2.imwrite(out, debug)
    print(f"标注图已保存: {out}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(f"用法: python {sys.argv[0]} <screenshot.png> <tile.png> [similarity] [x|y|w|h] [x,y|x,y|x,y|x,y]")
        sys.exit(1)
    run(
        sys.argv[1],
        sys.argv[2],
        float(sys.argv[3]) if len(sys.argv) > 3 else 0.9,
        sys.argv[4] if len(sys.argv) > 4 else None,
        sys.argv[5] if len(sys.argv) > 5 else None,
    )
