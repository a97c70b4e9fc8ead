import threading
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from tkinter.scrolledtext import ScrolledText
from pathlib import Path
import time

from langexport.config import load_settings
from langexport.core.errors import LangExportError
from langexport.core.logger import get_logger
from langexport.core.pipeline import ExportPipeline
from langexport.core.progress import EventType, QueueReporter


EVENT_COLORS = {
    EventType.INFO: "#333333",
    EventType.SUCCESS: "#1b7f3b",
    EventType.WARNING: "#b26a00",
    EventType.ERROR: "#c0392b",
}


class App(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("多语言导出 - Excel 转 JSON")
        self.geometry("860x520")

        self.logger = get_logger()
        self.settings = load_settings()
        self.workbook_path = tk.StringVar()
        self.reporter = QueueReporter(maxsize=self.settings.progress.queue_size)
        self.worker_thread: threading.Thread | None = None
        self._outcome: tuple[str, str] | None = None

        self._build_ui()

    def _build_ui(self):
        frm_top = ttk.Frame(self)
        frm_top.pack(fill=tk.X, padx=10, pady=10)

        ttk.Label(frm_top, text="Excel 文件：").pack(side=tk.LEFT)
        ttk.Entry(frm_top, textvariable=self.workbook_path, width=70).pack(side=tk.LEFT, padx=5)
        ttk.Button(frm_top, text="浏览...", command=self._choose_workbook).pack(side=tk.LEFT)

        frm_btn = ttk.Frame(self)
        frm_btn.pack(fill=tk.X, padx=10)
        self.btn_start = ttk.Button(frm_btn, text="开始导出", command=self._on_start)
        self.btn_start.pack(side=tk.LEFT)
        ttk.Button(frm_btn, text="退出", command=self.destroy).pack(side=tk.RIGHT)

        frm_log = ttk.Labelframe(self, text="运行日志")
        frm_log.pack(fill=tk.BOTH, expand=True, padx=10, pady=(5, 10))
        self.txt_log = ScrolledText(frm_log, height=18, state=tk.DISABLED)
        self.txt_log.pack(fill=tk.BOTH, expand=True)
        for event_type, color in EVENT_COLORS.items():
            self.txt_log.tag_configure(event_type.value, foreground=color)

        self.after(150, self._poll_progress)

    def _choose_workbook(self):
        selected = filedialog.askopenfilename(
            title="选择多语言 Excel 文件",
            filetypes=[("Excel", "*.xlsx *.xlsm"), ("All files", "*.*")],
        )
        if selected:
            self.workbook_path.set(selected)

    def _append_log(self, line: str, tag: str):
        self.txt_log.configure(state=tk.NORMAL)
        self.txt_log.insert(tk.END, line, tag)
        self.txt_log.see(tk.END)
        self.txt_log.configure(state=tk.DISABLED)

    def _on_start(self):
        if self.worker_thread and self.worker_thread.is_alive():
            messagebox.showinfo("提示", "正在导出中，请稍候…")
            return
        path = self.workbook_path.get().strip()
        if not path:
            messagebox.showwarning("提示", "请先选择一个 Excel 文件。")
            return

        self.txt_log.configure(state=tk.NORMAL)
        self.txt_log.delete("1.0", tk.END)
        self.txt_log.configure(state=tk.DISABLED)
        self.btn_start.configure(state=tk.DISABLED)

        def worker():
            try:
                pipeline = ExportPipeline(settings=self.settings, logger=self.logger, reporter=self.reporter)
                result = pipeline.run(Path(path))
                self._outcome = ("完成", result.summary)
            except LangExportError as e:
                self._outcome = ("错误", str(e))
            except Exception as e:  # noqa: BLE001 - surface to UI
                self.logger.exception("Export failed")
                self._outcome = ("错误", f"{type(e).__name__}: {e}")

        self._outcome = None
        self.worker_thread = threading.Thread(target=worker, daemon=True)
        self.worker_thread.start()

    def _poll_progress(self):
        try:
            for event in self.reporter.drain():
                ts = time.strftime("%H:%M:%S")
                self._append_log(f"[{ts}] {event.message}\n", event.type.value)
            if self.worker_thread is not None and not self.worker_thread.is_alive() and self._outcome:
                title, detail = self._outcome
                self._outcome = None
                self.worker_thread = None
                self.btn_start.configure(state=tk.NORMAL)
                if self.reporter.dropped:
                    self._append_log(f"（{self.reporter.dropped} 条进度消息因队列已满被丢弃）\n", EventType.WARNING.value)
                    self.reporter.dropped = 0
                if title == "错误":
                    messagebox.showerror(title, detail)
                else:
                    messagebox.showinfo(title, detail)
        finally:
            self.after(200, self._poll_progress)


def main():
    app = App()
    app.mainloop()


if __name__ == "__main__":
    main()
