from unittest.mock import MagicMock

import requests

TEST_API_KEY = "test-secret-key-123"


def make_response(json_data=None, status_code=200, reason="OK", text=None, headers=None):
    """A stand-in for requests.Response as returned by requests.get."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = headers or {}
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    else:
        response.json.return_value = json_data
        response.text = text if text is not None else str(json_data)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Client Error: {reason} for url: https://pixabay.com/api/?key={TEST_API_KEY}&q=cats",
            response=response,
        )
    return response


def image_hit(hit_id=1, tags="cat, pet", user="alice", webformat_url="https://cdn.pixabay.com/photo/cat_640.jpg"):
    return {
        "id": hit_id,
        "pageURL": f"https://pixabay.com/photos/{hit_id}/",
        "type": "photo",
        "tags": tags,
        "previewURL": "https://cdn.pixabay.com/photo/cat_150.jpg",
        "webformatURL": webformat_url,
        "largeImageURL": "https://pixabay.com/get/cat_1280.jpg",
        "views": 100,
        "downloads": 50,
        "likes": 10,
        "user": user,
    }


def video_hit(hit_id=7, tags="ocean, waves", user="bob", duration=12.9, videos=None):
    if videos is None:
        videos = {
            "large": {"url": "https://cdn.pixabay.com/video/large.mp4", "width": 1920, "height": 1080, "size": 9000},
            "medium": {"url": "https://cdn.pixabay.com/video/medium.mp4", "width": 1280, "height": 720, "size": 5000},
            "small": {"url": "https://cdn.pixabay.com/video/small.mp4", "width": 960, "height": 540, "size": 3000},
            "tiny": {"url": "https://cdn.pixabay.com/video/tiny.mp4", "width": 640, "height": 360, "size": 1000},
        }
    return {
        "id": hit_id,
        "pageURL": f"https://pixabay.com/videos/{hit_id}/",
        "type": "film",
        "tags": tags,
        "duration": duration,
        "videos": videos,
        "views": 300,
        "downloads": 20,
        "likes": 5,
        "user": user,
    }


def search_payload(hits, total_hits=None):
    total_hits = len(hits) if total_hits is None else total_hits
    return {"total": total_hits, "totalHits": total_hits, "hits": hits}
