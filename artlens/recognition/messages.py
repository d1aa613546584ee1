"""User-facing recognition messages."""

from __future__ import annotations

from artlens.types import Language, MessageKey

RECOGNITION_MESSAGES: dict[Language, dict[MessageKey, str]] = {
    Language.ES: {
        MessageKey.SUCCESS_IDENTIFIED: "¡Obra identificada! Se ha guardado en tu colección.",
        MessageKey.NOT_IDENTIFIED: (
            "No pudimos identificar la obra de arte. "
            "Intenta con mejor iluminación o desde otro ángulo."
        ),
        MessageKey.INVALID_FORMAT: "Formato de imagen inválido. Solo se aceptan JPG, PNG y HEIC.",
        MessageKey.FILE_TOO_LARGE: "La imagen es demasiado grande. El tamaño máximo es 10MB.",
        MessageKey.MISSING_IMAGE: "Debes proporcionar una imagen.",
        MessageKey.MISSING_LOCAL_URI: "Debes proporcionar el URI local de la imagen capturada.",
        MessageKey.PROCESSING_ERROR: "Error al procesar la imagen. Por favor, intenta de nuevo.",
        MessageKey.RATE_LIMIT: "Has alcanzado el límite de reconocimientos. Intenta más tarde.",
    },
    Language.EN: {
        MessageKey.SUCCESS_IDENTIFIED: "Artwork identified! It has been saved to your collection.",
        MessageKey.NOT_IDENTIFIED: (
            "We could not identify the artwork. "
            "Try with better lighting or from another angle."
        ),
        MessageKey.INVALID_FORMAT: "Invalid image format. Only JPG, PNG and HEIC are accepted.",
        MessageKey.FILE_TOO_LARGE: "The image is too large. Maximum size is 10MB.",
        MessageKey.MISSING_IMAGE: "You must provide an image.",
        MessageKey.MISSING_LOCAL_URI: "You must provide the local URI of the captured image.",
        MessageKey.PROCESSING_ERROR: "Error processing the image. Please try again.",
        MessageKey.RATE_LIMIT: "You have reached the recognition limit. Try again later.",
    },
    Language.FR: {
        MessageKey.SUCCESS_IDENTIFIED: "Œuvre identifiée ! Elle a été sauvegardée dans votre collection.",
        MessageKey.NOT_IDENTIFIED: (
            "Nous n'avons pas pu identifier l'œuvre. "
            "Essayez avec un meilleur éclairage ou sous un autre angle."
        ),
        MessageKey.INVALID_FORMAT: "Format d'image invalide. Seuls JPG, PNG et HEIC sont acceptés.",
        MessageKey.FILE_TOO_LARGE: "L'image est trop volumineuse. La taille maximale est de 10 Mo.",
        MessageKey.MISSING_IMAGE: "Vous devez fournir une image.",
        MessageKey.MISSING_LOCAL_URI: "Vous devez fournir l'URI local de l'image capturée.",
        MessageKey.PROCESSING_ERROR: "Erreur lors du traitement de l'image. Veuillez réessayer.",
        MessageKey.RATE_LIMIT: "Vous avez atteint la limite de reconnaissance. Réessayez plus tard.",
    },
}


def get_message(language: Language | str, key: MessageKey) -> str:
    if not isinstance(language, Language):
        language = Language.resolve(language)
    return RECOGNITION_MESSAGES[language][key]
