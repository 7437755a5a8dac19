import json
from typing import Any, Dict

from relay_nodes.errors import UpstreamError
from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


BOUNDARY = "-------314159265358979323846"
FILE_FIELDS = "files(id,name,mimeType,size,createdTime,webViewLink)"
FOLDER_MIME = "application/vnd.google-apps.folder"


def _metadata(params: Dict[str, Any], mime_type: str) -> dict:
    meta = {"name": params["fileName"], "mimeType": mime_type}
    if params.get("folderId"):
        meta["parents"] = [params["folderId"]]
    return meta


def _file_content(params: Dict[str, Any]) -> str:
    return params.get("fileContent") or "Empty file content"


def _upload(params):
    delimiter = f"\r\n--{BOUNDARY}\r\n"
    body = (
        delimiter
        + "Content-Type: application/json\r\n\r\n"
        + json.dumps(_metadata(params, "text/plain"))
        + delimiter
        + "Content-Type: text/plain\r\n\r\n"
        + _file_content(params)
        + f"\r\n--{BOUNDARY}--"
    )
    return HttpCall(
        method="POST",
        path="/upload/drive/v3/files",
        params={"uploadType": "multipart"},
        headers={"Content-Type": f"multipart/related; boundary={BOUNDARY}"},
        content=body,
    )


def _uploaded(ex: Exchange):
    file_id = ex.payload.get("id")
    return {
        "fileId": file_id,
        "fileName": ex.payload.get("name"),
        "size": len(_file_content(ex.params)),
        "uploadedAt": ex.timestamp,
        "webViewLink": ex.payload.get("webViewLink") or f"https://drive.google.com/file/d/{file_id}/view",
    }


def _downloaded(ex: Exchange):
    files = ex.payload.get("files") or []
    name = ex.params["fileName"]
    if not files:
        raise UpstreamError(f"File '{name}' not found", 404)
    file_id = files[0]["id"]
    return {
        "fileId": file_id,
        "fileName": name,
        "downloadUrl": f"https://drive.google.com/uc?export=download&id={file_id}",
        "downloadedAt": ex.timestamp,
    }


def _size(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _files(payload) -> list:
    return [
        {
            "id": f.get("id"),
            "name": f.get("name"),
            "mimeType": f.get("mimeType"),
            "size": _size(f.get("size")),
            "createdTime": f.get("createdTime"),
            "webViewLink": f.get("webViewLink"),
        }
        for f in (payload.get("files") or [])
    ]


def _folder_created(ex: Exchange):
    folder_id = ex.payload.get("id")
    return {
        "folderId": folder_id,
        "name": ex.payload.get("name"),
        "createdTime": ex.timestamp,
        "webViewLink": ex.payload.get("webViewLink") or f"https://drive.google.com/drive/folders/{folder_id}",
    }


PROVIDER = ProviderSpec(
    name="drive",
    title="Google Drive",
    base_url="https://www.googleapis.com",
    doc="Upload, find and organise files in Google Drive.",
    auth=AuthSpec(type="bearer", credential="accessToken", message="Access token is required"),
    actions={
        "upload": ActionSpec(
            name="upload",
            title="Upload file",
            required={"fileName": "File name is required for upload"},
            request=_upload,
            extract=_uploaded,
        ),
        "download": ActionSpec(
            name="download",
            title="Download file",
            required={"fileName": "File name is required for download"},
            request=lambda params: HttpCall(
                path="/drive/v3/files",
                params={"q": f"name='{params['fileName']}'", "fields": "files(id,name)"},
            ),
            extract=_downloaded,
        ),
        "list": ActionSpec(
            name="list",
            title="List files",
            request=lambda params: HttpCall(path="/drive/v3/files", params={"pageSize": 10, "fields": FILE_FIELDS}),
            extract=lambda ex: {"files": _files(ex.payload)},
        ),
        "search": ActionSpec(
            name="search",
            title="Search files",
            required={"searchQuery": "Search query is required for search action"},
            request=lambda params: HttpCall(
                path="/drive/v3/files",
                params={"q": params["searchQuery"], "pageSize": 10, "fields": FILE_FIELDS},
            ),
            extract=lambda ex: {"query": ex.params["searchQuery"], "results": _files(ex.payload)},
        ),
        "create_folder": ActionSpec(
            name="create_folder",
            title="Create folder",
            required={"fileName": "Folder name is required for creating folders"},
            request=lambda params: HttpCall(method="POST", path="/drive/v3/files", json_body=_metadata(params, FOLDER_MIME)),
            extract=_folder_created,
        ),
    },
)
