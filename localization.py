class Translator:
    def __init__(self) -> None:
        self.language = "en"
        self.translations = {
            "en": {},
            "ja": {
                "Workout Calendar": "筋トレカレンダー",
                "Back": "背中",
                "Back to calendar": "カレンダーに戻る",
                "Back to day": "日付に戻る",
                "Save and back": "保存して戻る",
                "Edit": "編集",
                "Delete": "削除",
                "Add exercise": "種目を追加",
                "Choose exercise": "種目を選択",
                "Previous record": "前回の記録",
                "No previous record": "前回の記録はありません",
                "No entries for this day": "この日の記録はありません",
                "Set": "セット",
                "Weight": "重量",
                "Reps": "回数",
                "Memo": "メモ",
                "Chest": "胸",
                "Shoulders": "肩",
                "Legs": "脚",
                "Arms": "腕",
                "Bench Press": "ベンチプレス",
                "Dumbbell Fly": "ダンベルフライ",
                "Incline Press": "インクラインプレス",
                "Lat Pulldown": "ラットプルダウン",
                "Deadlift": "デッドリフト",
                "Seated Row": "シーテッドロー",
                "Shoulder Press": "ショルダープレス",
                "Side Raise": "サイドレイズ",
                "Rear Raise": "リアレイズ",
                "Squat": "スクワット",
                "Leg Press": "レッグプレス",
                "Leg Curl": "レッグカール",
                "Barbell Curl": "バーベルカール",
                "Dumbbell Curl": "ダンベルカール",
                "Triceps Pushdown": "トライセプスプッシュダウン",
            },
        }

    def set_language(self, lang: str) -> None:
        self.language = lang

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

translator = Translator()
